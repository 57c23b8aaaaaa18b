"""Exceptions raised by the task store and engine."""

from typing import Optional


class TodoError(Exception):
    """Base class for errors raised on purpose by todolist."""


class TaskIndexError(TodoError, IndexError):
    """A task index outside the current list bounds."""

    def __init__(self, index: object, length: int) -> None:
        self.index = index
        self.length = length
        if length == 0:
            msg = f"Invalid index {index}: the list is empty."
        else:
            msg = f"Invalid index {index}: expected 0..{length - 1}."
        super().__init__(msg)


class FormatError(TodoError, ValueError):
    """Unsupported import/export format or file extension."""


class ParseError(TodoError, ValueError):
    """A document that is not well-formed JSON/CSV task data."""

    def __init__(
        self, message: str, source: Optional[str] = None, line: Optional[int] = None
    ) -> None:
        self.source = source
        self.line = line
        where = ""
        if source:
            where = f"{source}"
            if line is not None:
                where += f":{line}"
            where += ": "
        elif line is not None:
            where = f"line {line}: "
        super().__init__(f"{where}{message}")


class StorageError(TodoError):
    """Reading or writing the underlying file failed."""


class CorruptDocumentError(StorageError, ParseError):
    """The persisted task document exists but is malformed."""
