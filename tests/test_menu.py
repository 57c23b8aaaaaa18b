# tests/test_menu.py

from __future__ import annotations

from pathlib import Path

from todolist.engine import TaskEngine
from todolist.menu import MENU, Menu
from todolist.models import Task


class ScriptedInput:
    """Feeds canned answers to the menu; EOF once they run out."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


def _run(engine: TaskEngine, *answers: str) -> ScriptedInput:
    scripted = ScriptedInput(*answers)
    Menu(engine, input_fn=scripted).run()
    return scripted


def test_quit_prints_goodbye(engine: TaskEngine, capsys) -> None:
    _run(engine, "quit")
    assert "Goodbye!" in capsys.readouterr().out


def test_eof_ends_menu(engine: TaskEngine, capsys) -> None:
    _run(engine)
    assert "Goodbye!" in capsys.readouterr().out


def test_add_with_defaults(engine: TaskEngine) -> None:
    # description, priority (default Medium), due date (blank)
    _run(engine, "add", "Buy milk", "", "", "quit")
    assert engine.list_tasks() == [Task("Buy milk", priority="Medium")]


def test_add_reprompts_bad_date_and_priority(engine: TaskEngine, capsys) -> None:
    _run(engine, "1", "Pay rent", "urgent", "high", "31/12", "2099-12-31", "quit")
    assert engine.list_tasks() == [Task("Pay rent", priority="High", due_date="2099-12-31")]
    out = capsys.readouterr().out
    assert "Invalid date" in out
    assert "Choose one of" in out


def test_done_reprompts_invalid_number(engine: TaskEngine, capsys) -> None:
    engine.add("A")
    engine.add("B")
    _run(engine, "done", "9", "abc", "2", "quit")
    assert [t.done for t in engine.list_tasks()] == [False, True]
    assert capsys.readouterr().out.count("Invalid task number.") == 2


def test_blank_number_cancels(engine: TaskEngine) -> None:
    engine.add("A")
    _run(engine, "delete", "", "quit")
    assert len(engine.list_tasks()) == 1


def test_edit_keeps_defaults(engine: TaskEngine) -> None:
    engine.add("Old", priority="Low", due_date="2030-01-01")
    _run(engine, "edit", "1", "New", "", "", "quit")
    assert engine.list_tasks() == [Task("New", priority="Low", due_date="2030-01-01")]


def test_edit_dash_clears_due_date(engine: TaskEngine) -> None:
    engine.add("Old", priority="Low", due_date="2030-01-01")
    _run(engine, "edit", "1", "", "", "-", "quit")
    assert engine.list_tasks() == [Task("Old", priority="Low")]


def test_move(engine: TaskEngine) -> None:
    for name in ("A", "B", "C"):
        engine.add(name)
    _run(engine, "move", "1", "4", "3", "quit")
    assert [t.description for t in engine.list_tasks()] == ["B", "C", "A"]


def test_delete_requires_confirmation(engine: TaskEngine) -> None:
    engine.add("A")
    engine.add("B")
    _run(engine, "delete", "1", "n", "delete", "1", "y", "quit")
    assert [t.description for t in engine.list_tasks()] == ["B"]


def test_clear_then_undo_then_redo(engine: TaskEngine, capsys) -> None:
    engine.add("A")
    _run(engine, "clear", "y", "undo", "redo", "redo", "quit")
    assert engine.list_tasks() == []
    out = capsys.readouterr().out
    assert "All tasks cleared." in out
    assert "Undo successful." in out
    assert "Redo successful." in out
    assert "Nothing to redo." in out


def test_nothing_to_undo(engine: TaskEngine, capsys) -> None:
    _run(engine, "undo", "quit")
    assert "Nothing to undo." in capsys.readouterr().out


def test_list_shows_progress(engine: TaskEngine, capsys) -> None:
    engine.add("A")
    engine.add("B")
    engine.add("C")
    engine.mark_done(0)
    _run(engine, "list", "quit")
    out = capsys.readouterr().out
    assert "1. [x] A" in out
    assert "Progress: 1/3 completed (33%)" in out


def test_search(engine: TaskEngine, capsys) -> None:
    engine.add("Alpha", priority="High")
    engine.add("Beta", priority="Low")
    capsys.readouterr()
    _run(engine, "search", "alp", "", "", "quit")
    out = capsys.readouterr().out
    assert "Alpha" in out
    assert "Beta" not in out


def test_export_and_import(engine: TaskEngine, tmp_path: Path) -> None:
    engine.add("A, b")
    target = tmp_path / "dump"
    _run(engine, "export", "csv", str(target), "clear", "y", "import", f"{target}.csv", "quit")
    assert engine.list_tasks() == [Task("A, b")]


def test_import_errors_are_reported(engine: TaskEngine, tmp_path: Path, capsys) -> None:
    engine.add("keep")
    bad = tmp_path / "bad.json"
    bad.write_text("{bad json", encoding="utf-8")
    _run(engine, "import", str(tmp_path / "x.txt"), "import", str(bad), "quit")
    out = capsys.readouterr().out
    assert "Unsupported file type" in out
    assert "invalid JSON" in out
    assert engine.list_tasks() == [Task("keep")]


def test_corrupt_store_is_reported(engine: TaskEngine, tasks_path: Path, capsys) -> None:
    tasks_path.write_text("not json", encoding="utf-8")
    _run(engine, "list", "quit")
    assert "Storage error" in capsys.readouterr().out
    assert tasks_path.read_text(encoding="utf-8") == "not json"


def test_help_lists_every_entry(engine: TaskEngine, capsys) -> None:
    _run(engine, "help", "quit")
    out = capsys.readouterr().out
    for _, label in MENU:
        assert f"- {label}" in out


def test_unknown_choice(engine: TaskEngine, capsys) -> None:
    _run(engine, "fly", "99", "quit")
    assert capsys.readouterr().out.count("Unknown choice") == 2
