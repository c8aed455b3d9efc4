"""Process-wide run mode, read from the ``XUN_MODE`` environment variable."""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import TextIO

ENV_XUN_MODE = "XUN_MODE"


class Mode(str, Enum):
    """The modes the library can run in."""

    DEBUG = "debug"
    RELEASE = "release"
    TEST = "test"

    def __str__(self) -> str:
        return self.value


DEFAULT_WRITER: TextIO = sys.stdout
"""Stream used for debug output."""

DEFAULT_ERROR_WRITER: TextIO = sys.stderr
"""Stream used for error output."""

_current: Mode = Mode.DEBUG


def set_mode(value: str | Mode | None) -> None:
    """Set the run mode; an empty value selects debug mode.

    Raises ValueError for a name that is not a known mode.
    """
    if not value:
        value = Mode.DEBUG.value
    try:
        selected = Mode(value)
    except ValueError:
        raise ValueError(
            f"xun mode unknown: {value} (available mode: debug release test)"
        ) from None
    global _current
    _current = selected


def mode() -> Mode:
    """Return the current run mode."""
    return _current


set_mode(os.environ.get(ENV_XUN_MODE, ""))