"""Coloured status messages for the terminal."""

from __future__ import annotations

import os
import sys

_RED = "31"
_GREEN = "32"
_BLUE = "34"
_BOLD = "1"


def no_emoji() -> bool:
    """Return True when the NO_EMOJI environment variable is set."""
    return "NO_EMOJI" in os.environ


def _colors_enabled() -> bool:
    force = os.environ.get("CLICOLOR_FORCE")
    if force and force != "0":
        return True
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _style(text: object, code: str) -> str:
    text = str(text)
    if not _colors_enabled():
        return text
    return f"\x1b[{code}m{text}\x1b[0m"


def bold(text: object) -> str:
    """Return text rendered in bold when colours are enabled."""
    return _style(text, _BOLD)


def blue(text: object) -> str:
    """Return text rendered in blue when colours are enabled."""
    return _style(text, _BLUE)


def warn(message: str) -> None:
    """Print a warning line in red."""
    icon = "!" if no_emoji() else "⚠️ "
    print(f"{_style(icon, _RED)} {_style(message, _RED)}")


def success(message: str) -> None:
    """Print a success line in green."""
    icon = "✓" if no_emoji() else "✅"
    print(f"{_style(icon, _GREEN)} {_style(message, _GREEN)}")