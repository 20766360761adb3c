import logging
import sys
from pixelforge.config import settings

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}


def _level_from_name(name):
    return LOG_LEVEL_MAP.get(str(name).upper(), logging.INFO)


# Level from settings, INFO if invalid or not found
log_level = _level_from_name(getattr(settings, 'LOGGING_LEVEL', 'INFO'))

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Command output owns stdout, so log records go to stderr
console_handler = logging.StreamHandler(sys.stderr)
console_handler.setFormatter(log_formatter)

_logger_names = set()


def get_logger(name):
    """
    Gets a logger instance configured with the application's settings.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Prevent adding handlers multiple times if get_logger is called repeatedly for the same name
    if not logger.handlers:
        logger.addHandler(console_handler)

    logger.propagate = False
    _logger_names.add(name)

    return logger


def set_log_level(level):
    """Change the level of every logger handed out by get_logger, and of later ones."""
    global log_level
    log_level = _level_from_name(level) if isinstance(level, str) else int(level)
    for name in _logger_names:
        logging.getLogger(name).setLevel(log_level)
    return log_level
