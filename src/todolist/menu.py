"""Interactive numbered menu on top of TaskEngine.

Each choice runs one engine call to completion; bad task numbers are
re-prompted, other user errors are reported and the menu is shown again.
"""

import logging
from typing import Callable, List, Optional, Tuple

from .cli import print_list, print_progress
from .engine import TaskEngine
from .errors import FormatError, ParseError, StorageError, TaskIndexError
from .models import PRIORITIES, STATUS_FILTERS, Task
from .theme import BLUE, BOLD, GREEN, RED, YELLOW, color
from .transcode import check_due_date

logger = logging.getLogger(__name__)

MENU: List[Tuple[str, str]] = [
    ("add", "Add a new task"),
    ("list", "List all tasks"),
    ("done", "Mark task as done"),
    ("undone", "Mark task as undone"),
    ("edit", "Edit a task"),
    ("move", "Move a task"),
    ("delete", "Delete a task"),
    ("clear", "Clear all tasks"),
    ("search", "Search/filter tasks"),
    ("export", "Export tasks"),
    ("import", "Import tasks"),
    ("undo", "Undo"),
    ("redo", "Redo"),
    ("help", "Help"),
    ("quit", "Quit"),
]


class _Quit(Exception):
    """End of input while prompting."""


class Menu:
    def __init__(self, engine: TaskEngine, input_fn: Callable[[str], str] = input):
        self.engine = engine
        self._input = input_fn

    # ---- prompting ----

    def ask(self, prompt: str, default: str = "") -> str:
        suffix = f" [{default}]" if default else ""
        try:
            ans = self._input(f"{prompt}{suffix}: ")
        except EOFError:
            raise _Quit()
        return ans if ans != "" else default

    def ask_choice(self, prompt: str, choices: Tuple[str, ...], default: str) -> str:
        lowered = {c.lower(): c for c in choices}
        while True:
            ans = self.ask(f"{prompt} ({'/'.join(choices)})", default).strip().lower()
            if ans in lowered:
                return lowered[ans]
            print(color(f"Choose one of: {', '.join(choices)}", RED))

    def ask_priority(self, default: str = "Medium") -> str:
        return self.ask_choice("Priority", PRIORITIES, default)

    def ask_due_date(self, default: str = "") -> str:
        """Return an ISO date or "" for none; re-prompts on invalid dates.

        With a default, blank keeps it and "-" clears it.
        """
        hint = "'-' for none" if default else "optional"
        prompt = f"Due date (YYYY-MM-DD, {hint})"
        while True:
            ans = self.ask(prompt, default).strip()
            if ans == "-":
                return ""
            try:
                check_due_date(ans)
            except ValueError:
                print(color("Invalid date", RED))
                continue
            return ans

    def ask_number(self, prompt: str) -> Optional[int]:
        """A 1-based task number, or None when left blank."""
        while True:
            ans = self.ask(prompt).strip()
            if not ans:
                return None
            try:
                return int(ans)
            except ValueError:
                print(color("Invalid task number.", RED))

    def with_task(self, prompt: str, action: Callable[[int], None]) -> None:
        """Ask for a task number and run action(index) until it is in range."""
        while True:
            number = self.ask_number(prompt)
            if number is None:
                print("Cancelled.")
                return
            try:
                action(number - 1)
                return
            except TaskIndexError:
                print(color("Invalid task number.", RED))

    def confirm(self, question: str) -> bool:
        try:
            return self.ask(f"{question} [y/N]").strip().lower() in ("y", "yes")
        except _Quit:
            return False

    # ---- actions ----

    def show(self, tasks: List[Task]) -> None:
        print_list(tasks)

    def do_add(self) -> None:
        desc = self.ask("Task description")
        priority = self.ask_priority()
        due = self.ask_due_date()
        self.engine.add(desc, priority=priority, due_date=due)
        print(color("Task added.", GREEN))

    def do_list(self) -> None:
        tasks = self.engine.list_tasks()
        self.show(tasks)
        print_progress(tasks)

    def _pick_and(self, prompt: str, action: Callable[[int], None]) -> None:
        tasks = self.engine.list_tasks()
        if not tasks:
            print(color("No tasks found.", YELLOW))
            return
        self.show(tasks)
        self.with_task(prompt, action)

    def do_done(self) -> None:
        def act(i: int) -> None:
            self.engine.mark_done(i)
            print(color("Task marked as done.", GREEN))

        self._pick_and("Task number to mark as done", act)

    def do_undone(self) -> None:
        def act(i: int) -> None:
            self.engine.mark_undone(i)
            print(color("Task marked as undone.", YELLOW))

        self._pick_and("Task number to mark as undone", act)

    def do_edit(self) -> None:
        def act(i: int) -> None:
            current = self.engine.list_tasks()
            if not 0 <= i < len(current):
                raise TaskIndexError(i, len(current))
            t = current[i]
            desc = self.ask("New description", t.description)
            priority = self.ask_priority(t.priority or "Medium")
            due = self.ask_due_date(t.due_date or "")
            self.engine.edit(i, desc, priority=priority, due_date=due)
            print(color("Task updated.", GREEN))

        self._pick_and("Task number to edit", act)

    def do_move(self) -> None:
        tasks = self.engine.list_tasks()
        if len(tasks) < 2:
            print(color("Need at least two tasks to move.", YELLOW))
            return
        self.show(tasks)

        def act(src: int) -> None:
            if not 0 <= src < len(tasks):
                raise TaskIndexError(src, len(tasks))

            def move_to(dst: int) -> None:
                self.engine.move(src, dst)
                print(color("Task moved.", GREEN))

            self.with_task("Move to position", move_to)

        self.with_task("Move task number", act)

    def do_delete(self) -> None:
        def act(i: int) -> None:
            current = self.engine.list_tasks()
            if not 0 <= i < len(current):
                raise TaskIndexError(i, len(current))
            if self.confirm(f'Are you sure you want to delete: "{current[i].description}"?'):
                self.engine.delete(i)
                print(color("Task deleted.", RED))

        self._pick_and("Task number to delete", act)

    def do_clear(self) -> None:
        if self.confirm("Are you sure you want to clear all tasks?"):
            self.engine.clear()
            print(color("All tasks cleared.", RED))

    def do_search(self) -> None:
        term = self.ask("Search keyword (leave blank for all)")
        status = self.ask_choice("Filter by status", STATUS_FILTERS, "all")
        priority = self.ask_choice("Filter by priority", ("all",) + PRIORITIES, "all")
        self.show(self.engine.search(term, status=status, priority=priority))

    def do_export(self) -> None:
        fmt = self.ask_choice("Export as", ("json", "csv"), "json")
        path = self.ask("Export file path", "exported_tasks")
        written = self.engine.export_to(path, fmt)
        print(color(f"Tasks exported to {written}.", GREEN))

    def do_import(self) -> None:
        path = self.ask("Import file path").strip()
        if not path:
            print("Cancelled.")
            return
        tasks = self.engine.import_from(path)
        print(color(f"Imported {len(tasks)} task(s) from {path}.", GREEN))

    def do_undo(self) -> None:
        if self.engine.undo() is None:
            print(color("Nothing to undo.", YELLOW))
        else:
            print(color("Undo successful.", GREEN))

    def do_redo(self) -> None:
        if self.engine.redo() is None:
            print(color("Nothing to redo.", YELLOW))
        else:
            print(color("Redo successful.", GREEN))

    def do_help(self) -> None:
        print(color("\nHelp - Available Commands:", BOLD))
        for _, label in MENU:
            print(f"- {label}")

    # ---- loop ----

    def print_menu(self) -> None:
        print()
        for n, (_, label) in enumerate(MENU, start=1):
            print(f"{n:>2}. {label}")

    def read_action(self) -> Optional[str]:
        """Return an action key from a number or a key name; None if unknown."""
        ans = self.ask("Choose an action").strip().lower()
        if ans.isdigit() and 1 <= int(ans) <= len(MENU):
            return MENU[int(ans) - 1][0]
        keys = {key for key, _ in MENU}
        return ans if ans in keys else None

    def dispatch(self, action: str) -> None:
        try:
            getattr(self, f"do_{action}")()
        except StorageError as e:
            logger.error("Storage failure during %s: %s", action, e)
            print(color(f"Storage error: {e}", RED))
        except (FormatError, ParseError, ValueError, TaskIndexError) as e:
            print(color(str(e), RED))

    def run(self) -> None:
        try:
            while True:
                self.print_menu()
                action = self.read_action()
                if action is None:
                    print(color("Unknown choice. Type a number or 'help'.", RED))
                    continue
                if action == "quit":
                    break
                self.dispatch(action)
        except (_Quit, KeyboardInterrupt):
            print()
        print(color("Goodbye!", BLUE))


def run_menu(engine: TaskEngine) -> None:
    Menu(engine).run()
