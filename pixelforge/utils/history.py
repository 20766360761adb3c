# Undo/redo of editor state
"""
Bounded undo/redo over immutable editor states.

The most recent entry of the undo side is the current state, so one undo
needs at least two entries. Pushing a new state discards anything that could
have been redone. States are frozen dataclasses and are stored as given.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Generic, List, Optional, TypeVar

from ..config import settings
from ..processing.adjustments import AdjustmentState
from ..processing.filters import FilterPreset
from .logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


@dataclass
class HistoryEntry(Generic[T]):
    state: T
    description: str = ""
    timestamp: float = field(default_factory=time.time)


class HistoryStack(Generic[T]):
    """Undo/redo stack with a size limit and an optional change listener."""

    def __init__(
        self,
        max_size: int = settings.HISTORY_MAX_SIZE,
        on_change: Optional[Callable[[], None]] = None,
    ):
        # deque(maxlen) drops the oldest entry once full
        self._past: Deque[HistoryEntry[T]] = deque(maxlen=max_size)
        self._future: List[HistoryEntry[T]] = []
        self._on_change = on_change

    def push(self, state: T, description: str = "") -> None:
        self._past.append(HistoryEntry(state, description))
        self._future.clear()
        logger.debug("Recorded '%s' (%d undo steps)", description or "unnamed", self.get_undo_count())
        self._changed()

    def undo(self) -> Optional[T]:
        """Step back and return the now-current state, or None at the oldest state."""
        if not self.can_undo():
            return None
        self._future.append(self._past.pop())
        current = self._past[-1]
        logger.debug("Undo to '%s'", current.description or "unnamed")
        self._changed()
        return current.state

    def redo(self) -> Optional[T]:
        """Re-apply the most recently undone state, or return None if there is none."""
        if not self.can_redo():
            return None
        entry = self._future.pop()
        self._past.append(entry)
        logger.debug("Redo to '%s'", entry.description or "unnamed")
        self._changed()
        return entry.state

    def can_undo(self) -> bool:
        return len(self._past) > 1

    def can_redo(self) -> bool:
        return bool(self._future)

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()
        self._changed()

    def get_undo_description(self) -> Optional[str]:
        return self._past[-1].description if self._past else None

    def get_redo_description(self) -> Optional[str]:
        return self._future[-1].description if self._future else None

    def get_undo_count(self) -> int:
        return max(0, len(self._past) - 1)

    def get_redo_count(self) -> int:
        return len(self._future)

    def get_current_state(self) -> Optional[T]:
        return self._past[-1].state if self._past else None

    def _changed(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change()
        except Exception:
            logger.exception("History change listener failed")


@dataclass(frozen=True)
class EditState:
    """What the editor can undo: slider values plus the active filter."""
    adjustments: AdjustmentState
    filter: Optional[FilterPreset] = None


class EditHistory(HistoryStack[EditState]):
    """Undo/redo of adjustment and filter changes."""

    def record(
        self,
        adjustments: AdjustmentState,
        filter_preset: Optional[FilterPreset] = None,
        description: str = "",
    ) -> EditState:
        """Push the editor state unless it equals the current one; return it either way."""
        state = EditState(adjustments, filter_preset)
        if state != self.get_current_state():
            self.push(state, description)
        return state
