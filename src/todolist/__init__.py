"""todolist - a personal task list kept in one JSON file."""

__version__ = "1.0.0"

from .models import Task, PRIORITIES, DEFAULT_PATH
from .errors import (
    TodoError,
    TaskIndexError,
    FormatError,
    ParseError,
    StorageError,
    CorruptDocumentError,
)
from .storage import TaskStore
from .history import History
from .engine import TaskEngine

__all__ = [
    "Task",
    "PRIORITIES",
    "DEFAULT_PATH",
    "TodoError",
    "TaskIndexError",
    "FormatError",
    "ParseError",
    "StorageError",
    "CorruptDocumentError",
    "TaskStore",
    "History",
    "TaskEngine",
]
