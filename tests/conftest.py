# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todolist.engine import TaskEngine
from todolist.history import History
from todolist.storage import TaskStore


@pytest.fixture(autouse=True)
def _no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep printed output free of ANSI codes."""
    monkeypatch.setattr("todolist.theme.enabled", lambda: False)


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "todos.json"


@pytest.fixture()
def store(tasks_path: Path) -> TaskStore:
    return TaskStore(str(tasks_path))


@pytest.fixture()
def engine(store: TaskStore) -> TaskEngine:
    return TaskEngine(store, History(limit=20))


@pytest.fixture()
def write_doc(tasks_path: Path):
    """Write raw JSON entries straight to the task file."""

    def _write(entries) -> None:
        tasks_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")

    return _write


@pytest.fixture()
def read_doc(tasks_path: Path):
    def _read():
        return json.loads(tasks_path.read_text(encoding="utf-8"))

    return _read
