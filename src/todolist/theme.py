"""ANSI color helpers.

Colors are on for a TTY unless NO_COLOR is set; FORCE_COLOR=1 turns them on
for pipes too.
"""

import os
import sys

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None


def enabled() -> bool:
    if _NO_COLOR:
        return False
    return _FORCE or sys.stdout.isatty()


def _code(part: str) -> str:
    return f"\033[{part}m"


RESET = _code("0")
BOLD = _code("1")
RED = _code("31")
GREEN = _code("32")
YELLOW = _code("33")
BLUE = _code("34")
CYAN = _code("36")
BG_RED = _code("41")

PRIORITY_COLOR = {
    "High": RED,
    "Medium": YELLOW,
    "Low": GREEN,
}


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to text (no-op when colors are disabled)."""
    if not styles or not enabled():
        return text
    return "".join(styles) + text + RESET
