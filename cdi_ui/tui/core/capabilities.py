from __future__ import annotations

import os
import sys
from typing import Any


def _is_terminal(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty is not None and isatty())


def is_tty_available() -> bool:
    """Both stdin (token prompt) and stdout (pickers) must be terminals."""
    return _is_terminal(sys.stdin) and _is_terminal(sys.stdout)


def supports_fullscreen_ui() -> bool:
    return is_tty_available() and os.environ.get("TERM", "") != "dumb"
