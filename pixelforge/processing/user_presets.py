from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..config import settings
from ..io.storage import JsonKeyValueStore
from ..utils.errors import PresetError
from ..utils.logger import get_logger
from .adjustments import AdjustmentState
from .filters import NONE_FILTER, FilterPreset

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserPreset:
    """A user-saved snapshot of slider values and the active filter."""
    name: str
    adjustments: AdjustmentState
    filter: Optional[FilterPreset] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "adjustments": self.adjustments.to_dict(),
            "filter": self.filter.to_dict() if self.filter is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserPreset":
        if not isinstance(data, Mapping):
            raise PresetError("Preset must be a JSON object")
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise PresetError("Preset is missing a valid 'name'")
        if "adjustments" not in data:
            raise PresetError(f"Preset '{name}' has no 'adjustments'")

        adjustments = AdjustmentState.from_dict(data["adjustments"])
        filter_data = data.get("filter")
        filter_preset = FilterPreset.from_dict(filter_data) if filter_data is not None else None
        return cls(name=name, adjustments=adjustments, filter=filter_preset)


def apply_preset(preset: UserPreset) -> Tuple[AdjustmentState, FilterPreset]:
    """Return the editor state a preset restores; no filter means the 'Original' filter."""
    return preset.adjustments, preset.filter or NONE_FILTER


class UserPresetStore:
    """
    Load/save user presets.

    Stored under one key of a JsonKeyValueStore as a JSON list of objects:
      { "name": "...", "adjustments": { ... }, "filter": { ... } | null }

    The list only grows: saving and importing append.
    """

    def __init__(self, store: Optional[JsonKeyValueStore] = None, key: Optional[str] = None):
        self.store = store if store is not None else JsonKeyValueStore()
        self.key = key or settings.STORAGE_DEFAULTS["presets_key"]
        self._presets: List[UserPreset] = []
        self.load()

    def load(self) -> None:
        data = self.store.get_item(self.key)
        if data is None:
            logger.info("No user presets stored under %s.", self.key)
            self._presets = []
            return
        self._presets = self._parse(data)
        logger.info("Loaded %s user presets.", len(self._presets))

    def _parse(self, data: Any) -> List[UserPreset]:
        if not isinstance(data, list):
            logger.warning("User presets under %s must be a JSON list.", self.key)
            return []
        presets = []
        for idx, item in enumerate(data):
            try:
                presets.append(UserPreset.from_dict(item))
            except PresetError as e:
                logger.warning("Skipping invalid user preset #%d: %s", idx, e)
        return presets

    def list_presets(self) -> List[UserPreset]:
        return list(self._presets)

    def find(self, name: str) -> Optional[UserPreset]:
        """Return the most recently saved preset with this name."""
        for preset in reversed(self._presets):
            if preset.name == name:
                return preset
        return None

    def _append(self, preset: UserPreset) -> UserPreset:
        entry = preset.to_dict()

        def append(stored):
            # Append to what is stored now, keeping entries this instance skipped
            # and entries saved through other instances
            items = list(stored) if isinstance(stored, list) else []
            items.append(entry)
            return items

        stored = self.store.update(self.key, append)
        self._presets = self._parse(stored)
        logger.info("Saved user preset '%s' (%d stored).", preset.name, len(stored))
        return preset

    def save_preset(
        self,
        name: str,
        adjustments: AdjustmentState,
        filter_preset: Optional[FilterPreset] = None,
    ) -> UserPreset:
        if not isinstance(name, str) or not name.strip():
            raise PresetError("Enter a preset name.")
        return self._append(UserPreset(name=name.strip(), adjustments=adjustments, filter=filter_preset))

    def import_preset(self, payload: Union[str, bytes, Mapping[str, Any]]) -> UserPreset:
        """Append a preset from a share payload (JSON text or an already-parsed dict)."""
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except ValueError as e:
                raise PresetError("Share payload is not valid JSON", original_error=e) from e
        return self._append(UserPreset.from_dict(payload))

    @staticmethod
    def export_preset(preset: UserPreset) -> str:
        """Return the JSON share payload for a preset."""
        return json.dumps(preset.to_dict(), ensure_ascii=False, separators=(",", ":"))


class EditClipboard:
    """Copy the current edits and paste them onto another image later."""

    def __init__(self, store: Optional[JsonKeyValueStore] = None, key: Optional[str] = None):
        self.store = store if store is not None else JsonKeyValueStore()
        self.key = key or settings.STORAGE_DEFAULTS["clipboard_key"]

    def copy(self, adjustments: AdjustmentState, filter_preset: Optional[FilterPreset] = None) -> None:
        self.store.set_item(self.key, {
            "adjustments": adjustments.to_dict(),
            "filter": filter_preset.to_dict() if filter_preset is not None else None,
        })

    def paste(self) -> Optional[Tuple[AdjustmentState, Optional[FilterPreset]]]:
        data = self.store.get_item(self.key)
        if data is None:
            return None
        if not isinstance(data, Mapping) or "adjustments" not in data:
            logger.warning("Clipboard content under %s is not a valid edit set.", self.key)
            return None
        try:
            adjustments = AdjustmentState.from_dict(data["adjustments"])
            filter_data = data.get("filter")
            filter_preset = FilterPreset.from_dict(filter_data) if filter_data is not None else None
        except PresetError as e:
            logger.warning("Clipboard content is invalid: %s", e)
            return None
        return adjustments, filter_preset
