"""Tests for the logging helper."""

import logging

import pytest

from pixelforge.utils import logger as logger_module
from pixelforge.utils.logger import get_logger, set_log_level


@pytest.fixture
def restore_level():
    previous = logger_module.log_level
    yield
    set_log_level(previous)


class TestGetLogger:

    def test_single_handler(self):
        log = get_logger("pixelforge.tests.single")
        get_logger("pixelforge.tests.single")
        assert len(log.handlers) == 1
        assert log.propagate is False

    def test_level_from_settings(self):
        assert get_logger("pixelforge.tests.level").level == logger_module.log_level


class TestSetLogLevel:

    def test_updates_existing_and_new_loggers(self, restore_level):
        existing = get_logger("pixelforge.tests.existing")
        assert set_log_level("debug") == logging.DEBUG
        assert existing.level == logging.DEBUG
        assert get_logger("pixelforge.tests.later").level == logging.DEBUG

    def test_unknown_name_falls_back_to_info(self, restore_level):
        assert set_log_level("chatty") == logging.INFO

    def test_cli_flag(self, restore_level, capsys):
        from pixelforge.main import main

        assert main(["--log-level", "WARNING", "filters", "--search", "noir"]) == 0
        assert logging.getLogger("pixelforge.main").level == logging.WARNING
