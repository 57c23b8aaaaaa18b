"""Task engine: every operation on the task list.

Each mutating operation loads the list from the store, validates its
arguments, saves the new list and only then records the previous list in
the undo history. A rejected call (bad index, bad value) or a failed save
leaves both the file and the history untouched.
"""

import logging
import os
from typing import Callable, List, Optional

from .core import Progress, check_index, filter_tasks, move_item, progress
from .errors import FormatError, StorageError
from .history import History, snapshot
from .models import ALL, Task
from .storage import TaskStore, atomic_write_text, read_text
from .transcode import (
    DECODERS,
    ENCODERS,
    check_due_date,
    check_priority,
    infer_format,
    normalize_format,
)

logger = logging.getLogger(__name__)


class TaskEngine:
    def __init__(self, store: TaskStore, history: Optional[History] = None) -> None:
        self.store = store
        self.history = history if history is not None else History()

    # ---- internals ----

    def _mutate(self, action: str, change: Callable[[List[Task]], None]) -> List[Task]:
        before = self.store.load()
        after = snapshot(before)
        change(after)
        self.store.save(after)
        self.history.record(before)
        logger.info("%s (%d task(s))", action, len(after))
        return after

    def _replace(self, action: str, new_tasks: List[Task]) -> List[Task]:
        def apply(tasks: List[Task]) -> None:
            tasks[:] = new_tasks

        return self._mutate(action, apply)

    # ---- queries ----

    def list_tasks(self) -> List[Task]:
        return self.store.load()

    def search(
        self,
        term: Optional[str] = None,
        status: Optional[str] = ALL,
        priority: Optional[str] = ALL,
    ) -> List[Task]:
        """Tasks whose description contains `term` and that match the filters.

        status is "all", "done" or "undone"; priority is "all" or an exact
        priority. The original order is kept.
        """
        return filter_tasks(self.store.load(), term, status, priority)

    def progress(self) -> Progress:
        return progress(self.store.load())

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    # ---- mutations ----

    def add(
        self,
        description: str,
        priority: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> List[Task]:
        task = Task(
            description=description,
            priority=check_priority(priority),
            due_date=check_due_date(due_date),
        )
        return self._mutate("Added task", lambda tasks: tasks.append(task))

    def mark_done(self, index: int) -> List[Task]:
        return self._set_done(index, True)

    def mark_undone(self, index: int) -> List[Task]:
        return self._set_done(index, False)

    def _set_done(self, index: int, done: bool) -> List[Task]:
        def apply(tasks: List[Task]) -> None:
            check_index(tasks, index)
            tasks[index].done = done

        return self._mutate(f"Marked task {index} {'done' if done else 'undone'}", apply)

    def edit(
        self,
        index: int,
        description: str,
        priority: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> List[Task]:
        """Replace a task's description.

        priority / due_date: None keeps the current value, "" clears it.
        """
        new_priority = check_priority(priority)
        new_due = check_due_date(due_date)

        def apply(tasks: List[Task]) -> None:
            check_index(tasks, index)
            t = tasks[index]
            t.description = description
            if priority is not None:
                t.priority = new_priority
            if due_date is not None:
                t.due_date = new_due

        return self._mutate(f"Edited task {index}", apply)

    def move(self, from_index: int, to_index: int) -> List[Task]:
        return self._mutate(
            f"Moved task {from_index} -> {to_index}",
            lambda tasks: move_item(tasks, from_index, to_index),
        )

    def delete(self, index: int) -> List[Task]:
        def apply(tasks: List[Task]) -> None:
            check_index(tasks, index)
            del tasks[index]

        return self._mutate(f"Deleted task {index}", apply)

    def clear(self) -> List[Task]:
        return self._replace("Cleared all tasks", [])

    # ---- import / export ----

    def export_to(self, path: str, fmt: Optional[str] = None) -> str:
        """Write the current list to `path` as JSON or CSV; return the path written.

        Without `fmt` the format comes from the extension. With `fmt` and no
        extension on `path`, ".json" / ".csv" is appended.
        """
        path = os.path.expanduser(path)
        if fmt is None:
            fmt = infer_format(path)
        else:
            fmt = normalize_format(fmt)
            if not os.path.splitext(path)[1]:
                path = f"{path}.{fmt}"
            elif infer_format(path) != fmt:
                raise FormatError(f"Extension of {path} does not match format {fmt!r}.")
        tasks = self.store.load()
        atomic_write_text(path, ENCODERS[fmt](tasks))
        logger.info("Exported %d task(s) to %s as %s", len(tasks), path, fmt)
        return path

    def import_from(self, path: str) -> List[Task]:
        """Replace the whole list with the tasks parsed from `path`."""
        path = os.path.expanduser(path)
        fmt = infer_format(path)
        text = read_text(path)
        imported = DECODERS[fmt](text, source=path)
        return self._replace(f"Imported {len(imported)} task(s) from {path}", imported)

    # ---- history ----

    def undo(self) -> Optional[List[Task]]:
        """Restore the list as it was before the last mutation; None if nothing to undo."""
        current = self.store.load()
        restored = self.history.undo(current)
        if restored is None:
            logger.info("Nothing to undo")
            return None
        try:
            self.store.save(restored)
        except StorageError:
            self.history.revert_undo(restored)
            raise
        logger.info("Undo (%d task(s))", len(restored))
        return snapshot(restored)

    def redo(self) -> Optional[List[Task]]:
        """Re-apply the last undone change; None if nothing to redo."""
        current = self.store.load()
        restored = self.history.redo(current)
        if restored is None:
            logger.info("Nothing to redo")
            return None
        try:
            self.store.save(restored)
        except StorageError:
            self.history.revert_redo(restored)
            raise
        logger.info("Redo (%d task(s))", len(restored))
        return snapshot(restored)
