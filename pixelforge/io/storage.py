# Durable key-value storage backed by a single JSON file
from __future__ import annotations

import json
import os
import tempfile
import threading
from typing import Any, Callable, Dict, List, Optional

import appdirs

from ..config import settings
from ..utils.errors import ErrorCategory, StorageError, handle_errors
from ..utils.logger import get_logger

logger = get_logger(__name__)


def default_store_path() -> str:
    data_dir = appdirs.user_data_dir(settings.APP_NAME, settings.APP_AUTHOR)
    return os.path.join(data_dir, settings.STORAGE_DEFAULTS["store_file"])


@handle_errors(fallback_value=dict, category=ErrorCategory.FILE_IO, log_level="exception")
def _read_store_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        logger.warning("Store file %s must contain a JSON object; ignoring it.", path)
        return {}
    return data


class JsonKeyValueStore:
    """
    String-keyed store of JSON values persisted to one file.

    File format: a JSON object mapping keys to values. Every write replaces
    the file atomically. A missing, unreadable or corrupt file reads as an
    empty store.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = os.fspath(path) if path else default_store_path()
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not os.path.isfile(self.path):
            return {}
        return _read_store_file(self.path)

    def _write(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".store-", suffix=".json", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise StorageError(f"Failed to write store {self.path}: {e}", path=self.path, original_error=e) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_item(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._write(data)
        logger.debug("Stored key %s in %s", key, self.path)

    def update(self, key: str, fn: Callable[[Optional[Any]], Any]) -> Any:
        """Read-modify-write one key under the store lock; returns the new value.

        ``fn`` receives the stored value (None if absent) and returns its replacement.
        """
        with self._lock:
            data = self._load()
            value = fn(data.get(key))
            data[key] = value
            self._write(data)
        logger.debug("Updated key %s in %s", key, self.path)
        return value

    def remove_item(self, key: str) -> bool:
        with self._lock:
            data = self._load()
            if key not in data:
                return False
            del data[key]
            self._write(data)
            return True

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._load().keys())
