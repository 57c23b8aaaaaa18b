"""Undo/redo history of task-list snapshots."""

from dataclasses import replace
from typing import List, Optional

from .models import Task

DEFAULT_LIMIT = 20


def snapshot(tasks: List[Task]) -> List[Task]:
    """Copy a task list so later mutation cannot reach the copy."""
    return [replace(t) for t in tasks]


class History:
    """Two stacks of snapshots.

    The undo stack keeps at most `limit` entries (oldest dropped first).
    Recording a new mutation clears the redo stack; only undo() fills it.
    """

    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self._undo: List[List[Task]] = []
        self._redo: List[List[Task]] = []
        # oldest undo entry pushed out by the last redo(), kept for revert_redo()
        self._dropped: Optional[List[Task]] = None

    def __len__(self) -> int:
        return len(self._undo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def _push_undo(self, tasks: List[Task]) -> Optional[List[Task]]:
        """Push a copy; return the oldest entry if the bound pushed it out."""
        self._undo.append(snapshot(tasks))
        if len(self._undo) > self.limit:
            return self._undo.pop(0)
        return None

    def record(self, before: List[Task]) -> None:
        """Remember the list as it was before a mutation."""
        self._push_undo(before)
        self._redo.clear()

    def undo(self, current: List[Task]) -> Optional[List[Task]]:
        """Return the snapshot to restore, or None when there is nothing to undo."""
        if not self._undo:
            return None
        self._redo.append(snapshot(current))
        return self._undo.pop()

    def redo(self, current: List[Task]) -> Optional[List[Task]]:
        """Return the snapshot to restore, or None when there is nothing to redo."""
        if not self._redo:
            return None
        self._dropped = self._push_undo(current)
        return self._redo.pop()

    def revert_undo(self, restored: List[Task]) -> None:
        """Put back the effect of undo() when the restored list could not be saved."""
        self._redo.pop()
        self._undo.append(restored)

    def revert_redo(self, restored: List[Task]) -> None:
        """Put back the effect of redo() when the restored list could not be saved."""
        self._undo.pop()
        if self._dropped is not None:
            self._undo.insert(0, self._dropped)
            self._dropped = None
        self._redo.append(restored)
