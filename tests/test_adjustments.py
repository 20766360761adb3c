"""Tests for the adjustment state."""

import dataclasses

import pytest

from pixelforge.processing.adjustments import AdjustmentState
from pixelforge.utils.errors import PresetError


class TestAdjustmentState:
    """Tests for AdjustmentState."""

    def test_defaults_are_neutral(self):
        state = AdjustmentState()
        assert state == AdjustmentState.identity()
        assert state.is_identity()
        assert state.to_dict() == {
            "brightness": 0.0, "contrast": 1.0, "saturation": 1.0, "temperature": 0.0, "tint": 0.0,
        }

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AdjustmentState().brightness = 0.5

    def test_with_value(self):
        state = AdjustmentState().with_value("contrast", 1.2)
        assert state.contrast == 1.2
        assert not state.is_identity()

    def test_with_unknown_value(self):
        with pytest.raises(KeyError):
            AdjustmentState().with_value("exposure", 1.0)

    def test_clamped(self):
        state = AdjustmentState(brightness=3.0, contrast=-1.0, saturation=2.5, temperature=-4, tint=0.5)
        assert state.clamped() == AdjustmentState(brightness=1.0, contrast=0.0, saturation=2.0, temperature=-1.0, tint=0.5)


class TestAdjustmentStateFromDict:
    """Tests for loading stored slider values."""

    def test_missing_keys_are_neutral(self):
        assert AdjustmentState.from_dict({"brightness": 0.2}) == AdjustmentState(brightness=0.2)

    def test_unknown_keys_ignored(self):
        assert AdjustmentState.from_dict({"tint": -0.3, "vignette": 9}) == AdjustmentState(tint=-0.3)

    def test_ints_accepted(self):
        assert AdjustmentState.from_dict({"saturation": 0}).saturation == 0.0

    @pytest.mark.parametrize("value", ["1.2", True, None, [1]])
    def test_non_numeric_rejected(self, value):
        with pytest.raises(PresetError):
            AdjustmentState.from_dict({"contrast": value})

    def test_non_mapping_rejected(self):
        with pytest.raises(PresetError):
            AdjustmentState.from_dict([0.1, 1, 1, 0, 0])

    def test_round_trip(self):
        state = AdjustmentState(brightness=-0.2, contrast=1.1, saturation=0.4, temperature=0.7, tint=-0.1)
        assert AdjustmentState.from_dict(state.to_dict()) == state
