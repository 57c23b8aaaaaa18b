"""Settings loaded from environment variables.

One Settings object for the whole app; command-line flags override it.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .history import DEFAULT_LIMIT
from .models import DEFAULT_DIR, DEFAULT_LIST, list_path

ENV_PREFIX = "TODOLIST"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return os.path.expanduser(raw.strip())


@dataclass(frozen=True)
class Settings:
    data_dir: str
    tasks_file: str
    history_limit: int
    log_level: str
    log_file: Optional[str]

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _env_path(_k("DIR"), DEFAULT_DIR)
        tasks_file = _env_path(_k("FILE"), list_path(DEFAULT_LIST, data_dir))
        history_limit = max(1, _env_int(_k("HISTORY_LIMIT"), DEFAULT_LIMIT))
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_file = _env_path(_k("LOG_FILE"), "") or None
        return Settings(
            data_dir=data_dir,
            tasks_file=tasks_file,
            history_limit=history_limit,
            log_level=log_level,
            log_file=log_file,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
