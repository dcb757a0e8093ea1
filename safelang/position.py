"""Line and column lookup for character offsets."""

from __future__ import annotations

from bisect import bisect_right
from typing import Sequence


def build_line_starts(text: str) -> list[int]:
    """Return the offset at which each line of ``text`` starts."""
    return [0, *(idx + 1 for idx, ch in enumerate(text) if ch == "\n")]


def line_col_from_offset(
    text: str, line_starts: Sequence[int], offset: int
) -> tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair."""
    offset = min(offset, len(text))
    line_idx = max(bisect_right(line_starts, offset) - 1, 0)
    line_start = line_starts[line_idx] if line_starts else 0
    line_start = min(line_start, len(text))
    return line_idx + 1, offset - line_start + 1