"""Formatting and printing of printable runtime values."""

from __future__ import annotations

import sys
from typing import Any

from .safestring import SafeString


def format_printable(value: Any) -> str:
    """Render a string, SafeString, bool or integer as text."""
    if isinstance(value, SafeString):
        return value.to_str()
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    raise TypeError(f"value of type {type(value).__name__} is not printable")


def print_any(value: Any) -> None:
    sys.stdout.write(format_printable(value))


def printl_any(value: Any) -> None:
    print_any(value)
    sys.stdout.write("\n")


def print_value(value: Any) -> None:
    print_any(value)


def printl(value: Any) -> None:
    printl_any(value)