# User-tunable color adjustments
from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping

from ..config import settings
from ..utils.errors import PresetError


@dataclass(frozen=True)
class AdjustmentState:
    """The five slider values. Every field is always defined.

    brightness is additive, contrast and saturation are multiplicative,
    temperature and tint scale single channels. The defaults form the
    neutral tuple (0, 1, 1, 0, 0).
    """
    brightness: float = 0.0
    contrast: float = 1.0
    saturation: float = 1.0
    temperature: float = 0.0
    tint: float = 0.0

    @classmethod
    def identity(cls) -> "AdjustmentState":
        return cls(**settings.ADJUSTMENT_DEFAULTS)

    def is_identity(self) -> bool:
        return self == self.identity()

    def with_value(self, name: str, value: float) -> "AdjustmentState":
        """Return a copy with one slider changed."""
        if name not in settings.ADJUSTMENT_DEFAULTS:
            raise KeyError(f"Unknown adjustment '{name}'")
        return replace(self, **{name: float(value)})

    def clamped(self) -> "AdjustmentState":
        """Return a copy with every slider limited to its UI range."""
        values = {}
        for name, (low, high) in settings.ADJUSTMENT_RANGES.items():
            values[name] = min(max(getattr(self, name), low), high)
        return AdjustmentState(**values)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AdjustmentState":
        """Build a state from a stored mapping.

        Missing keys take their neutral value and unknown keys are ignored.
        Booleans and non-numeric values are rejected.
        """
        if not isinstance(data, Mapping):
            raise PresetError("Adjustments must be a mapping of slider names to numbers")

        values = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise PresetError(f"Adjustment '{f.name}' must be a number, got {value!r}")
            values[f.name] = float(value)
        return cls(**values)
