"""
Bounded undo history of whole-floor object snapshots.

Each entry is a deep copy of one floor's object list taken immediately before
a mutation. Undo is a plain LIFO pop; the entry carries the floor index it
belongs to, so it restores that floor whichever floor is on screen.
"""

# Indoorplan imports
from indoorplan import config
from indoorplan.models import IndoorObject, UndoEntry

# Standard library imports
import copy
import logging
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


class UndoLog:
    """LIFO stack of UndoEntry, capped at ``max_entries`` (oldest dropped first)."""

    def __init__(self, max_entries: int = config.MAX_UNDO):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries:   int                 = max_entries
        self._entries:      List[UndoEntry]     = []

    def push(self, floor_idx: int, objects: Sequence[IndoorObject]) -> UndoEntry:
        """Snapshot ``objects`` (deep copy) for ``floor_idx`` and push it."""
        entry = UndoEntry(floor_idx=floor_idx, snapshot=copy.deepcopy(list(objects)))
        self._entries.append(entry)
        if len(self._entries) > self.max_entries:
            self._entries.pop(0)
        logger.debug(f"Undo push floor={floor_idx} ({len(self._entries)} entries)")
        return entry

    def pop(self) -> Optional[UndoEntry]:
        """Remove and return the most recent entry, or None when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[UndoEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> List[UndoEntry]:
        """Oldest-first view of the history (read only by convention)."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
