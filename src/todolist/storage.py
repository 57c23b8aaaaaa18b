"""File I/O for todolist task documents."""

import logging
import os
import tempfile
from typing import List

from .errors import CorruptDocumentError, ParseError, StorageError
from .models import Task
from .transcode import decode_json, encode_json

logger = logging.getLogger(__name__)


def atomic_write_text(path: str, text: str) -> None:
    """Replace `path` with `text` without ever exposing a half-written file.

    Writes a temp file next to the target, fsyncs it, then os.replace()s it
    over the original. The temp file is removed if anything fails.
    """
    directory = os.path.dirname(os.path.abspath(path))
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory
        )
    except OSError as e:
        raise StorageError(f"Cannot write {path}: {e.strerror or e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        _remove_quietly(tmp_path)
        raise StorageError(f"Cannot write {path}: {e.strerror or e}") from e
    except BaseException:
        _remove_quietly(tmp_path)
        raise


def _remove_quietly(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError:
        logger.debug("Could not remove temp file %s", path, exc_info=True)


def read_text(path: str) -> str:
    """Read a whole UTF-8 file, mapping OS failures to StorageError."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        raise StorageError(f"No such file: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Cannot read {path}: {e}") from e


class TaskStore:
    """The single JSON document that holds the task list.

    Every load reads the whole file; every save rewrites it. A missing file
    is an empty list; a malformed one raises CorruptDocumentError.
    """

    def __init__(self, path: str) -> None:
        self._path = os.path.expanduser(str(path))

    @property
    def path(self) -> str:
        return self._path

    def exists(self) -> bool:
        return os.path.exists(self._path)

    def load(self) -> List[Task]:
        if not self.exists():
            logger.debug("No task file at %s; starting empty", self._path)
            return []
        text = read_text(self._path)
        try:
            tasks = decode_json(text, source=self._path)
        except ParseError as e:
            raise CorruptDocumentError(str(e)) from e
        logger.debug("Loaded %d task(s) from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        atomic_write_text(self._path, encode_json(tasks))
        logger.debug("Saved %d task(s) to %s", len(tasks), self._path)
