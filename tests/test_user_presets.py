"""Tests for user presets, sharing and the edit clipboard."""

import json

import pytest

from pixelforge.processing.adjustments import AdjustmentState
from pixelforge.processing.filters import NONE_FILTER, get_filter
from pixelforge.processing.user_presets import (
    EditClipboard,
    UserPreset,
    UserPresetStore,
    apply_preset,
)
from pixelforge.utils.errors import PresetError


class TestUserPresetStore:
    """Tests for saving and loading user presets."""

    def test_empty_store(self, store):
        assert UserPresetStore(store).list_presets() == []

    def test_save_and_reload(self, store):
        presets = UserPresetStore(store)
        saved = presets.save_preset("  Moody  ", AdjustmentState(brightness=-0.1, contrast=1.3), get_filter("noir"))
        assert saved.name == "Moody"

        reloaded = UserPresetStore(store).list_presets()
        assert reloaded == [saved]
        assert reloaded[0].filter == get_filter("noir")

    def test_saved_under_presets_key(self, store):
        UserPresetStore(store).save_preset("A", AdjustmentState())
        stored = store.get_item("@presets")
        assert stored == [{"name": "A", "adjustments": AdjustmentState().to_dict(), "filter": None}]

    def test_append_only(self, store):
        presets = UserPresetStore(store)
        presets.save_preset("Same", AdjustmentState(tint=0.1))
        presets.save_preset("Same", AdjustmentState(tint=0.2))
        assert len(presets.list_presets()) == 2
        assert presets.find("Same").adjustments.tint == 0.2
        assert presets.find("Other") is None

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, store, name):
        with pytest.raises(PresetError):
            UserPresetStore(store).save_preset(name, AdjustmentState())
        assert store.get_item("@presets") is None

    def test_invalid_entries_skipped(self, store):
        store.set_item("@presets", [
            {"name": "Good", "adjustments": {"saturation": 0.5}},
            {"name": "", "adjustments": {}},
            {"adjustments": {}},
            "junk",
        ])
        presets = UserPresetStore(store).list_presets()
        assert [p.name for p in presets] == ["Good"]

    def test_save_keeps_skipped_entries(self, store):
        invalid = {"name": "", "adjustments": {}}
        store.set_item("@presets", [{"name": "Good", "adjustments": {"saturation": 0.5}}, invalid])
        presets = UserPresetStore(store)
        presets.save_preset("New", AdjustmentState())

        stored = store.get_item("@presets")
        assert len(stored) == 3
        assert stored[1] == invalid
        assert [p.name for p in presets.list_presets()] == ["Good", "New"]

    def test_two_instances_do_not_overwrite(self, store):
        first = UserPresetStore(store)
        second = UserPresetStore(store)
        second.save_preset("x", AdjustmentState())
        first.save_preset("y", AdjustmentState())

        assert [p.name for p in first.list_presets()] == ["x", "y"]
        assert [p.name for p in UserPresetStore(store).list_presets()] == ["x", "y"]

    def test_non_list_ignored(self, store):
        store.set_item("@presets", {"name": "oops"})
        assert UserPresetStore(store).list_presets() == []


class TestSharing:
    """Tests for preset import/export payloads."""

    def test_export_then_import(self, store, tmp_path):
        source = UserPresetStore(store)
        preset = source.save_preset("Golden Hour", AdjustmentState(temperature=0.6), get_filter("golden"))
        payload = UserPresetStore.export_preset(preset)
        assert json.loads(payload)["filter"]["tintColor"] == "rgba(255, 215, 0, 0.1)"

        from pixelforge.io.storage import JsonKeyValueStore
        other = UserPresetStore(JsonKeyValueStore(str(tmp_path / "other.json")))
        imported = other.import_preset(payload)
        assert imported == preset
        assert other.list_presets() == [preset]

    def test_import_dict_without_filter(self, store):
        imported = UserPresetStore(store).import_preset({"name": "Flat", "adjustments": {"contrast": 0.8}})
        assert imported.filter is None
        assert imported.adjustments == AdjustmentState(contrast=0.8)

    @pytest.mark.parametrize("payload", [
        "not json",
        "[]",
        json.dumps({"adjustments": {}}),
        json.dumps({"name": "No adjustments"}),
        json.dumps({"name": "Bad", "adjustments": {"brightness": "lots"}}),
    ])
    def test_invalid_payload(self, store, payload):
        presets = UserPresetStore(store)
        with pytest.raises(PresetError):
            presets.import_preset(payload)
        assert presets.list_presets() == []


class TestApplyPreset:
    """Tests for apply_preset."""

    def test_with_filter(self):
        preset = UserPreset("P", AdjustmentState(brightness=0.3), get_filter("vivid"))
        assert apply_preset(preset) == (AdjustmentState(brightness=0.3), get_filter("vivid"))

    def test_without_filter_uses_original(self):
        adjustments, filter_preset = apply_preset(UserPreset("P", AdjustmentState()))
        assert filter_preset is NONE_FILTER


class TestEditClipboard:
    """Tests for copying and pasting edits."""

    def test_empty(self, store):
        assert EditClipboard(store).paste() is None

    def test_copy_paste(self, store):
        clipboard = EditClipboard(store)
        clipboard.copy(AdjustmentState(saturation=1.4), get_filter("retro"))
        assert EditClipboard(store).paste() == (AdjustmentState(saturation=1.4), get_filter("retro"))

    def test_copy_without_filter(self, store):
        EditClipboard(store).copy(AdjustmentState(tint=0.5))
        assert EditClipboard(store).paste() == (AdjustmentState(tint=0.5), None)

    def test_invalid_content(self, store):
        store.set_item("@clipboard", {"adjustments": {"tint": "green"}})
        assert EditClipboard(store).paste() is None
        store.set_item("@clipboard", [1, 2])
        assert EditClipboard(store).paste() is None
