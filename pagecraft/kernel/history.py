"""
Pagecraft Kernel -- History

Linear snapshot history with a single current pointer.

    entries:  [e0, e1, e2, e3]
    pointer:          ^
    undo -> e1, redo -> e2, push(x) -> [e0, e1, e2, x]

Invariants:
  - 0 <= pointer < len(entries)
  - entries[0] is the snapshot from the initial load and survives reset()
  - entries are frozen; every write builds a new list, so an entry handed
    out earlier stays valid for a later redo
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pagecraft.kernel.types import HistoryEntry

logger = logging.getLogger(__name__)


class HistoryStack:
    """Undo/redo over immutable Document snapshots."""

    def __init__(self, initial: HistoryEntry):
        if initial is None:
            raise ValueError("HistoryStack needs an initial entry")
        self._entries: tuple[HistoryEntry, ...] = (initial,)
        self._pointer = 0
        self._last_version = initial.version

    # -- inspection --

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def current(self) -> HistoryEntry:
        return self._entries[self._pointer]

    @property
    def original(self) -> HistoryEntry:
        return self._entries[0]

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def can_undo(self) -> bool:
        return self._pointer > 0

    def can_redo(self) -> bool:
        return self._pointer < len(self._entries) - 1

    def next_version(self) -> int:
        """Allocate a version number. Never reused, even across reset()."""
        self._last_version += 1
        return self._last_version

    # -- mutation --

    def push(self, entry: HistoryEntry) -> None:
        """Drop the redo tail, append `entry`, point at it."""
        if entry.version > self._last_version:
            self._last_version = entry.version
        self._entries = self._entries[: self._pointer + 1] + (entry,)
        self._pointer = len(self._entries) - 1

    def undo(self) -> HistoryEntry | None:
        if not self.can_undo():
            logger.debug("history: nothing to undo")
            return None
        self._pointer -= 1
        return self._entries[self._pointer]

    def redo(self) -> HistoryEntry | None:
        if not self.can_redo():
            logger.debug("history: nothing to redo")
            return None
        self._pointer += 1
        return self._entries[self._pointer]

    def reset(self) -> HistoryEntry:
        """Back to the initial snapshot; everything after it is discarded."""
        self._entries = self._entries[:1]
        self._pointer = 0
        return self._entries[0]
