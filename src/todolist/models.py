"""Data models and constants for todolist."""

import os
import re
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

DEFAULT_DIR = os.path.expanduser("~/.todolist")
DEFAULT_LIST = "todos"
DEFAULT_PATH = os.path.join(DEFAULT_DIR, f"{DEFAULT_LIST}.json")


def list_path(name: str, directory: str = DEFAULT_DIR) -> str:
    """Return the full path for a named list: ~/.todolist/{name}.json"""
    return os.path.join(directory, f"{name}.json")


Priority = Literal["High", "Medium", "Low"]
PRIORITIES: Tuple[str, ...] = ("High", "Medium", "Low")

STATUS_FILTERS: Tuple[str, ...] = ("all", "done", "undone")
ALL = "all"

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class Task:
    """A single task: description, completion flag, optional priority and due date."""

    description: str
    done: bool = False
    priority: Optional[Priority] = None
    due_date: Optional[str] = None  # ISO "YYYY-MM-DD"
