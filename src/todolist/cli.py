"""todolist command-line interface."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import get_settings
from .core import filter_tasks, is_overdue, progress
from .engine import TaskEngine
from .errors import TaskIndexError, TodoError
from .history import History
from .logging_setup import level_from_name, setup_logging
from .models import PRIORITIES, STATUS_FILTERS, Task, list_path
from .storage import TaskStore
from .theme import BG_RED, BLUE, BOLD, CYAN, GREEN, PRIORITY_COLOR, RED, YELLOW, color

logger = logging.getLogger(__name__)


def format_task(number: int, t: Task) -> str:
    """One list line: `3. [x] text [H] [2024-05-01]`."""
    status = color("[x]", GREEN) if t.done else color("[ ]", RED)
    parts = [f"{number}. {status} {color(t.description, BOLD)}"]
    if t.priority:
        parts.append("[" + color(t.priority[0], BOLD, PRIORITY_COLOR[t.priority]) + "]")
    if t.due_date:
        due = color("OVERDUE", BG_RED) if is_overdue(t) else color(t.due_date, CYAN)
        parts.append(f"[{due}]")
    return " ".join(parts)


def print_list(tasks: List[Task], numbers: Optional[List[int]] = None) -> None:
    """Print tasks with 1-based numbers (or the given numbers)."""
    if not tasks:
        print(color("No tasks found.", YELLOW))
        return
    if numbers is None:
        numbers = list(range(1, len(tasks) + 1))
    for n, t in zip(numbers, tasks):
        print(format_task(n, t))


def print_progress(tasks: List[Task]) -> None:
    p = progress(tasks)
    print(color(f"Progress: {p.done}/{p.total} completed ({p.percent}%)", BLUE))


def prompt_yes_no(question: str) -> bool:
    """Simple y/N terminal prompt."""
    try:
        ans = input(f"{question} [y/N]: ").strip().lower()
    except EOFError:
        return False
    return ans in ("y", "yes")


def make_engine(args: argparse.Namespace) -> TaskEngine:
    return TaskEngine(TaskStore(args.file), History(get_settings().history_limit))


def to_index(number: int) -> int:
    """User-facing numbers are 1-based; the engine is 0-based."""
    return number - 1


def cmd_list(args: argparse.Namespace) -> None:
    tasks = make_engine(args).list_tasks()
    print_list(tasks)
    print_progress(tasks)


def cmd_search(args: argparse.Namespace) -> None:
    tasks = make_engine(args).list_tasks()
    found = filter_tasks(tasks, args.term, status=args.status, priority=args.priority)
    # show the numbers `list` would show so they can be used with done/edit/...
    ids = {id(t): i for i, t in enumerate(tasks, start=1)}
    print_list(found, [ids[id(t)] for t in found])


def cmd_add(args: argparse.Namespace) -> None:
    make_engine(args).add(args.text, priority=args.priority, due_date=args.due)
    print(color("Task added.", GREEN))


def cmd_done(args: argparse.Namespace) -> None:
    make_engine(args).mark_done(to_index(args.index))
    print(color(f"Marked done: {args.index}.", GREEN))


def cmd_undone(args: argparse.Namespace) -> None:
    make_engine(args).mark_undone(to_index(args.index))
    print(color(f"Marked undone: {args.index}.", YELLOW))


def cmd_edit(args: argparse.Namespace) -> None:
    make_engine(args).edit(
        to_index(args.index), args.text, priority=args.priority, due_date=args.due
    )
    print(color(f"Edited {args.index}.", GREEN))


def cmd_move(args: argparse.Namespace) -> None:
    make_engine(args).move(to_index(args.source), to_index(args.dest))
    print(color(f"Moved {args.source} -> {args.dest}.", GREEN))


def cmd_delete(args: argparse.Namespace) -> None:
    engine = make_engine(args)
    tasks = engine.list_tasks()
    idx = to_index(args.index)
    if 0 <= idx < len(tasks) and not args.yes:
        if not prompt_yes_no(f'Delete "{tasks[idx].description}"?'):
            print("Cancelled.")
            return
    engine.delete(idx)
    print(color(f"Deleted {args.index}.", RED))


def cmd_clear(args: argparse.Namespace) -> None:
    if not args.yes and not prompt_yes_no("Clear all tasks?"):
        print("Cancelled.")
        return
    make_engine(args).clear()
    print(color("All tasks cleared.", RED))


def cmd_export(args: argparse.Namespace) -> None:
    written = make_engine(args).export_to(args.path, args.format)
    print(color(f"Tasks exported to {written}.", GREEN))


def cmd_import(args: argparse.Namespace) -> None:
    tasks = make_engine(args).import_from(args.path)
    print(color(f"Imported {len(tasks)} task(s) from {args.path}.", GREEN))


def cmd_path(args: argparse.Namespace) -> None:
    print(os.path.abspath(args.file))


def _add_task_fields(p: argparse.ArgumentParser) -> None:
    p.add_argument("-p", "--priority", choices=PRIORITIES, help="High, Medium or Low")
    p.add_argument("-d", "--due", metavar="YYYY-MM-DD", help="Due date")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    settings = get_settings()
    p = argparse.ArgumentParser(prog="todolist", description="Personal to-do list.")
    p.add_argument(
        "-f",
        "--file",
        default=settings.tasks_file,
        help=f"Path to the tasks file (default: {settings.tasks_file})",
    )
    p.add_argument(
        "-l",
        "--list",
        metavar="NAME",
        help=f"Use the named list {os.path.join(settings.data_dir, 'NAME.json')}",
    )
    p.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Console log level (default: %(default)s)",
    )
    sub = p.add_subparsers(dest="cmd")

    s_menu = sub.add_parser("menu", help="Interactive menu (default with no command)")
    s_menu.set_defaults(func=None)

    s_list = sub.add_parser("list", help="Show all tasks and progress")
    s_list.set_defaults(func=cmd_list)

    s_search = sub.add_parser("search", help="Search/filter tasks")
    s_search.add_argument("term", nargs="?", default=None, help="Keyword (case-insensitive)")
    s_search.add_argument("-s", "--status", choices=STATUS_FILTERS, default="all")
    s_search.add_argument("-p", "--priority", choices=("all",) + PRIORITIES, default="all")
    s_search.set_defaults(func=cmd_search)

    s_add = sub.add_parser("add", help="Append a new task")
    s_add.add_argument("text", help="Task text, quoted if it has spaces")
    _add_task_fields(s_add)
    s_add.set_defaults(func=cmd_add)

    s_done = sub.add_parser("done", help="Mark a task done")
    s_done.add_argument("index", type=int, help="Task number from `list`")
    s_done.set_defaults(func=cmd_done)

    s_undone = sub.add_parser("undone", help="Mark a task not done")
    s_undone.add_argument("index", type=int, help="Task number from `list`")
    s_undone.set_defaults(func=cmd_undone)

    s_edit = sub.add_parser("edit", help="Edit task text (and priority/due date)")
    s_edit.add_argument("index", type=int, help="Task number from `list`")
    s_edit.add_argument("text", help="New text")
    _add_task_fields(s_edit)
    s_edit.set_defaults(func=cmd_edit)

    s_move = sub.add_parser("move", help="Move a task to another position")
    s_move.add_argument("source", type=int, help="Current task number")
    s_move.add_argument("dest", type=int, help="New task number")
    s_move.set_defaults(func=cmd_move)

    s_delete = sub.add_parser("delete", help="Delete a task")
    s_delete.add_argument("index", type=int, help="Task number from `list`")
    s_delete.add_argument("-y", "--yes", action="store_true", help="Do not ask")
    s_delete.set_defaults(func=cmd_delete)

    s_clear = sub.add_parser("clear", help="Remove all tasks")
    s_clear.add_argument("-y", "--yes", action="store_true", help="Do not ask")
    s_clear.set_defaults(func=cmd_clear)

    s_export = sub.add_parser("export", help="Export tasks as JSON or CSV")
    s_export.add_argument("path", help="Destination file (.json or .csv)")
    s_export.add_argument("--format", choices=("json", "csv"), default=None)
    s_export.set_defaults(func=cmd_export)

    s_import = sub.add_parser("import", help="Replace tasks with a .json or .csv file")
    s_import.add_argument("path", help="Source file")
    s_import.set_defaults(func=cmd_import)

    s_path = sub.add_parser("path", help="Show the absolute path to the tasks file")
    s_path.set_defaults(func=cmd_path)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Launches the interactive menu if no subcommand given."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(console_level=level_from_name(args.log_level), log_file=settings.log_file)
    if args.list:
        args.file = list_path(args.list, settings.data_dir)

    if args.cmd is None or args.func is None:
        from .menu import run_menu

        run_menu(make_engine(args))
        return

    try:
        args.func(args)
    except TaskIndexError:
        sys.exit("Index out of range.")
    except (TodoError, ValueError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
