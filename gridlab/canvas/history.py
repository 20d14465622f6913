"""
Layout History
==============

Linear undo/redo over layout snapshots.
"""

import logging
from typing import Iterable, List, Optional

from ..models.grid_models import Box
from ..models.layout_models import HistoryEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 100


class History:
    """
    Ordered snapshots plus a cursor.

    Pushing discards everything after the cursor. When the depth cap is
    exceeded the oldest entries are dropped.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.max_entries = max_entries
        self._entries: List[HistoryEntry] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    @property
    def current(self) -> Optional[HistoryEntry]:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    def push(self, boxes: Iterable[Box], selection: Iterable[str]) -> HistoryEntry:
        """Snapshot layout and selection as the newest entry."""
        # Boxes are frozen models, so a tuple of them is already a deep snapshot
        entry = HistoryEntry(boxes=tuple(boxes), selection=frozenset(selection))
        del self._entries[self._cursor + 1:]
        self._entries.append(entry)

        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]
            logger.debug(f"[HISTORY] Dropped {overflow} oldest entries")

        self._cursor = len(self._entries) - 1
        return entry

    def undo(self) -> Optional[HistoryEntry]:
        """Step back one entry. Returns None when already at the oldest."""
        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[HistoryEntry]:
        """Step forward one entry. Returns None when already at the newest."""
        if not self.can_redo:
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def reset(self, boxes: Iterable[Box], selection: Iterable[str] = ()) -> None:
        """Drop all entries and start over from the given state."""
        self._entries.clear()
        self._cursor = -1
        self.push(boxes, selection)
