# tests/test_transcode.py

from __future__ import annotations

import pytest

from todolist.errors import FormatError, ParseError
from todolist.models import Task
from todolist.transcode import (
    check_due_date,
    check_priority,
    decode_csv,
    decode_json,
    encode_csv,
    infer_format,
)


def test_csv_layout() -> None:
    text = encode_csv(
        [
            Task("Buy milk"),
            Task("Pay rent", done=True, priority="High", due_date="2024-05-01"),
        ]
    )
    assert text == (
        "Task,Done,Priority,DueDate\n"
        "Buy milk,false,,\n"
        "Pay rent,true,High,2024-05-01\n"
    )


def test_csv_quotes_commas_and_quotes() -> None:
    text = encode_csv([Task('Say "hi", then leave')])
    assert text.splitlines()[1] == '"Say ""hi"", then leave",false,,'


def test_csv_decode_quoted_fields() -> None:
    text = 'Task,Done,Priority,DueDate\n"Say ""hi"", then leave",true,Low,\n'
    assert decode_csv(text) == [Task('Say "hi", then leave', done=True, priority="Low")]


def test_csv_preserves_descriptions_and_done_flags() -> None:
    tasks = [
        Task("plain"),
        Task("with, comma", done=True),
        Task('with "quotes"'),
        Task("multi\nline", done=True, priority="Medium", due_date="2030-01-02"),
        Task(""),
    ]
    assert decode_csv(encode_csv(tasks)) == tasks


def test_csv_done_is_true_only_for_literal_true() -> None:
    text = "Task,Done,Priority,DueDate\nA,TRUE,,\nB,yes,,\nC,true,,\n"
    assert [t.done for t in decode_csv(text)] == [False, False, True]


def test_csv_missing_trailing_fields_are_padded() -> None:
    text = "Task,Done\nA,true\nB,false"
    assert decode_csv(text) == [Task("A", done=True), Task("B")]


def test_csv_blank_lines_and_crlf() -> None:
    text = "Task,Done,Priority,DueDate\r\nA,true,,\r\n\r\nB,false,High,\r\n"
    assert decode_csv(text) == [Task("A", done=True), Task("B", priority="High")]


def test_csv_header_only_is_empty_list() -> None:
    assert decode_csv("Task,Done,Priority,DueDate\n") == []


@pytest.mark.parametrize(
    "text",
    [
        "A,true,,\n",  # no header
        "Task,Done,Priority,DueDate\nA,true,,,extra\n",
        "Task,Done,Priority,DueDate\nA,true,Urgent,\n",
        "Task,Done,Priority,DueDate\nA,true,,31/12/2024\n",
        'Task,Done,Priority,DueDate\n"unterminated,true,,\n',
    ],
)
def test_csv_malformed(text: str) -> None:
    with pytest.raises(ParseError):
        decode_csv(text, source="in.csv")


def test_csv_error_reports_line() -> None:
    with pytest.raises(ParseError) as exc:
        decode_csv("Task,Done,Priority,DueDate\nok,true,,\nbad,true,Urgent,\n", source="in.csv")
    assert exc.value.line == 3
    assert "in.csv:3" in str(exc.value)


def test_json_decode_rejects_non_array() -> None:
    with pytest.raises(ParseError):
        decode_json('{"task": "x", "done": false}')


def test_json_decode_ignores_unknown_keys() -> None:
    assert decode_json('[{"task": "x", "done": true, "id": 7}]') == [Task("x", done=True)]


def test_json_decode_empty_strings_are_unset() -> None:
    text = '[{"task": "a", "done": false, "priority": "", "dueDate": ""}]'
    assert decode_json(text) == [Task("a")]


@pytest.mark.parametrize(
    "path, fmt",
    [("a.json", "json"), ("a.csv", "csv"), ("dir/A.CSV", "csv"), ("x.tar.json", "json")],
)
def test_infer_format(path: str, fmt: str) -> None:
    assert infer_format(path) == fmt


@pytest.mark.parametrize("path", ["tasks.txt", "tasks", "tasks.json.bak"])
def test_infer_format_unsupported(path: str) -> None:
    with pytest.raises(FormatError):
        infer_format(path)


def test_check_priority_and_due_date() -> None:
    assert check_priority("High") == "High"
    assert check_priority("") is None
    assert check_due_date("2024-02-29") == "2024-02-29"
    assert check_due_date(None) is None
    with pytest.raises(ValueError):
        check_priority("high")
    with pytest.raises(ValueError):
        check_due_date("2023-02-29")
