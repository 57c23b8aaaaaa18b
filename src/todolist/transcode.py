"""Conversion between task lists and their JSON / CSV text forms."""

import csv
import io
import json
import os
from datetime import date
from typing import Any, Dict, List, Optional

from .errors import FormatError, ParseError
from .models import DATE_RE, PRIORITIES, Task

FORMATS = ("json", "csv")
CSV_HEADER = ["Task", "Done", "Priority", "DueDate"]


def infer_format(path: str) -> str:
    """Return "json" or "csv" from the file extension."""
    ext = os.path.splitext(path)[1].lower().lstrip(".")
    if ext not in FORMATS:
        raise FormatError(
            f"Unsupported file type {ext or '(none)'!r} for {path}. Use .json or .csv."
        )
    return ext


def normalize_format(fmt: str) -> str:
    value = (fmt or "").strip().lower().lstrip(".")
    if value not in FORMATS:
        raise FormatError(f"Unsupported format {fmt!r}. Use json or csv.")
    return value


def is_valid_date(value: str) -> bool:
    if not DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def check_priority(value: Optional[str]) -> Optional[str]:
    """Validate a priority argument; "" and None both mean unset."""
    if value is None or value == "":
        return None
    if value not in PRIORITIES:
        raise ValueError(f"Invalid priority {value!r}. Use one of: {', '.join(PRIORITIES)}.")
    return value


def check_due_date(value: Optional[str]) -> Optional[str]:
    """Validate a due date argument; "" and None both mean absent."""
    if value is None or value == "":
        return None
    if not is_valid_date(value):
        raise ValueError(f"Invalid due date {value!r}. Use YYYY-MM-DD.")
    return value


# ---- JSON ----


def task_to_dict(task: Task) -> Dict[str, Any]:
    data: Dict[str, Any] = {"task": task.description, "done": task.done}
    if task.priority is not None:
        data["priority"] = task.priority
    if task.due_date is not None:
        data["dueDate"] = task.due_date
    return data


def task_from_dict(raw: Any, position: int, source: Optional[str] = None) -> Task:
    """Build a Task from one JSON array entry, raising ParseError on bad shape."""

    def fail(msg: str) -> ParseError:
        return ParseError(f"entry {position}: {msg}", source=source)

    if not isinstance(raw, dict):
        raise fail("expected an object")
    if "task" not in raw:
        raise fail("missing 'task'")
    desc = raw["task"]
    if not isinstance(desc, str):
        raise fail("'task' must be a string")
    done = raw.get("done", None)
    if not isinstance(done, bool):
        raise fail("'done' must be true or false")
    # "" is what a CSV import leaves behind for an unset field
    priority = raw.get("priority") or None
    if priority is not None and priority not in PRIORITIES:
        raise fail(f"unknown priority {priority!r}")
    due = raw.get("dueDate") or None
    if due is not None and (not isinstance(due, str) or not is_valid_date(due)):
        raise fail(f"invalid dueDate {due!r}")
    return Task(description=desc, done=done, priority=priority, due_date=due)


def encode_json(tasks: List[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], indent=2, ensure_ascii=False) + "\n"


def decode_json(text: str, source: Optional[str] = None) -> List[Task]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON ({e.msg} at line {e.lineno})", source=source) from e
    if not isinstance(data, list):
        raise ParseError("expected a JSON array of tasks", source=source)
    return [task_from_dict(raw, i, source) for i, raw in enumerate(data)]


# ---- CSV ----


def encode_csv(tasks: List[Task]) -> str:
    """Serialize to `Task,Done,Priority,DueDate` rows.

    Descriptions containing a comma, quote or line break are quoted with
    inner quotes doubled; `Done` is the literal text true/false.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for t in tasks:
        writer.writerow(
            [
                t.description,
                "true" if t.done else "false",
                t.priority or "",
                t.due_date or "",
            ]
        )
    return buf.getvalue()


def decode_csv(text: str, source: Optional[str] = None) -> List[Task]:
    """Parse CSV produced by encode_csv (or a hand-written equivalent).

    Rows with fewer than four columns are padded with empty fields.
    """
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    tasks: List[Task] = []
    header_seen = False
    try:
        for row in reader:
            if not row:
                continue
            if not header_seen:
                if row[0].strip().lower() != "task":
                    raise ParseError(
                        "missing header row 'Task,Done,Priority,DueDate'",
                        source=source,
                        line=reader.line_num,
                    )
                header_seen = True
                continue
            tasks.append(_row_to_task(row, reader.line_num, source))
    except csv.Error as e:
        raise ParseError(f"invalid CSV ({e})", source=source, line=reader.line_num) from e
    return tasks


def _row_to_task(row: List[str], line: int, source: Optional[str]) -> Task:
    if len(row) > len(CSV_HEADER):
        raise ParseError(
            f"expected at most {len(CSV_HEADER)} fields, got {len(row)}",
            source=source,
            line=line,
        )
    desc, done, priority, due = row + [""] * (len(CSV_HEADER) - len(row))
    if priority and priority not in PRIORITIES:
        raise ParseError(f"unknown priority {priority!r}", source=source, line=line)
    if due and not is_valid_date(due):
        raise ParseError(f"invalid due date {due!r}", source=source, line=line)
    return Task(
        description=desc,
        done=done == "true",
        priority=priority or None,
        due_date=due or None,
    )


ENCODERS = {"json": encode_json, "csv": encode_csv}
DECODERS = {"json": decode_json, "csv": decode_csv}
