"""
Bounded undo/redo history of (grid, selection) snapshots.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum

from grid_types import Grid, NoHistoryError
from selection import Selection

logger = logging.getLogger(__name__)

DEFAULT_UNDO_LIMIT = 100


@dataclass(frozen=True)
class HistoryEntry:
    """A board snapshot together with the selection at that moment."""

    grid: Grid
    selection: Selection


class HistoryState(Enum):
    """Which of undo/redo are currently available."""

    EMPTY = "empty"
    UNDOABLE = "undoable"
    REDOABLE = "redoable"
    UNDOABLE_REDOABLE = "undoable_redoable"


class History:
    """
    Undo and redo stacks.

    The undo stack holds at most `limit` entries; pushing past the limit
    evicts the oldest entry. Any push clears the redo stack.
    """

    def __init__(self, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"Undo limit must be positive, got {limit}")
        self.limit = limit
        self._undo: deque[HistoryEntry] = deque(maxlen=limit)
        self._redo: list[HistoryEntry] = []

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def state(self) -> HistoryState:
        match (self.can_undo(), self.can_redo()):
            case (True, True):
                return HistoryState.UNDOABLE_REDOABLE
            case (True, False):
                return HistoryState.UNDOABLE
            case (False, True):
                return HistoryState.REDOABLE
            case _:
                return HistoryState.EMPTY

    def push(self, entry: HistoryEntry) -> None:
        """Record the pre-move snapshot and drop every pending redo."""
        if len(self._undo) == self.limit:
            logger.debug("history: evicting oldest of %d entries", self.limit)
        self._undo.append(entry)
        self._redo.clear()

    def undo(self, current: HistoryEntry) -> HistoryEntry:
        """
        Step back one snapshot.

        Args:
            current: The live snapshot, moved onto the redo stack

        Returns:
            The snapshot that becomes current

        Raises:
            NoHistoryError: If there is nothing to undo
        """
        if not self._undo:
            raise NoHistoryError("Nothing to undo")
        previous = self._undo.pop()
        self._redo.append(current)
        return previous

    def redo(self, current: HistoryEntry) -> HistoryEntry:
        """
        Step forward one snapshot.

        Args:
            current: The live snapshot, moved onto the undo stack

        Returns:
            The snapshot that becomes current

        Raises:
            NoHistoryError: If there is nothing to redo
        """
        if not self._redo:
            raise NoHistoryError("Nothing to redo")
        following = self._redo.pop()
        self._undo.append(current)
        return following

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
