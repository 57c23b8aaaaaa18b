"""Task-list helpers (pure functions, no I/O)."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from .errors import TaskIndexError
from .models import ALL, PRIORITIES, STATUS_FILTERS, Task


@dataclass(frozen=True)
class Progress:
    done: int
    total: int
    percent: int


def check_index(tasks: List[Task], index: int) -> None:
    """Raise TaskIndexError unless 0 <= index < len(tasks)."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise TaskIndexError(index, len(tasks))
    if index < 0 or index >= len(tasks):
        raise TaskIndexError(index, len(tasks))


def move_item(tasks: List[Task], from_index: int, to_index: int) -> None:
    """Remove the task at from_index and reinsert it at to_index, in place.

    to_index addresses the list after removal, so moving 0 -> 2 in
    [A, B, C] gives [B, C, A]. Both indices must be < len(tasks).
    """
    check_index(tasks, from_index)
    check_index(tasks, to_index)
    if from_index == to_index:
        return
    moved = tasks.pop(from_index)
    tasks.insert(to_index, moved)


def normalize_status(status: Optional[str]) -> str:
    value = (status or ALL).strip().lower()
    if value not in STATUS_FILTERS:
        raise ValueError(f"Invalid status filter {status!r}. Use all, done or undone.")
    return value


def normalize_priority_filter(priority: Optional[str]) -> str:
    if priority is None or priority.strip().lower() == ALL:
        return ALL
    value = priority.strip().capitalize()
    if value not in PRIORITIES:
        raise ValueError(
            f"Invalid priority filter {priority!r}. Use all, {', '.join(PRIORITIES)}."
        )
    return value


def filter_tasks(
    tasks: List[Task],
    term: Optional[str] = None,
    status: Optional[str] = ALL,
    priority: Optional[str] = ALL,
) -> List[Task]:
    """Tasks matching all of: keyword (case-insensitive), status and priority."""
    status = normalize_status(status)
    priority = normalize_priority_filter(priority)
    needle = term.lower() if term else ""

    out = []
    for t in tasks:
        if needle and needle not in t.description.lower():
            continue
        if status == "done" and not t.done:
            continue
        if status == "undone" and t.done:
            continue
        if priority != ALL and t.priority != priority:
            continue
        out.append(t)
    return out


def progress(tasks: List[Task]) -> Progress:
    done = sum(1 for t in tasks if t.done)
    total = len(tasks)
    percent = (done * 200 + total) // (2 * total) if total else 0  # half up
    return Progress(done=done, total=total, percent=percent)


def is_overdue(task: Task, today: Optional[date] = None) -> bool:
    """True for an unfinished task whose due date is before today."""
    if task.done or not task.due_date:
        return False
    today = today or date.today()
    return date.fromisoformat(task.due_date) < today
