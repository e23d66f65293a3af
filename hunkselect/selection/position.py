"""Diff-tree coordinates, selection modes, and their ordering.

A position is a plain tuple ``(file_index, hunk_index)`` or
``(file_index, hunk_index, line_index)``. The line component is advisory
outside line mode and may be ``None``.
"""

from __future__ import annotations

import functools
from enum import Enum
from typing import Union

HunkPosition = tuple[int, int]
LinePosition = tuple[int, int, Union[int, None]]
Position = Union[HunkPosition, LinePosition]


class SelectionMode(Enum):
    """Granularity of selection and navigation steps."""

    HUNK = "hunk"
    LINE = "line"

    @classmethod
    def coerce(cls, value: SelectionMode | str) -> SelectionMode:
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


def line_index_of(position: Position) -> int | None:
    """Return the line component, or ``None`` for hunk-granularity positions."""
    if len(position) < 3:
        return None
    return position[2]


def hunk_position_of(position: Position) -> HunkPosition:
    """Drop the line component."""
    return (position[0], position[1])


def compare_positions(a: Position, b: Position) -> int:
    """Order positions by file, then hunk, then line.

    Lines only participate when both sides carry one, so a hunk position
    and a line position in the same hunk compare equal.
    """
    if a[0] != b[0]:
        return -1 if a[0] < b[0] else 1
    if a[1] != b[1]:
        return -1 if a[1] < b[1] else 1
    line_a = line_index_of(a)
    line_b = line_index_of(b)
    if line_a is not None and line_b is not None and line_a != line_b:
        return -1 if line_a < line_b else 1
    return 0


position_sort_key = functools.cmp_to_key(compare_positions)


__all__ = [
    "HunkPosition",
    "LinePosition",
    "Position",
    "SelectionMode",
    "compare_positions",
    "hunk_position_of",
    "line_index_of",
    "position_sort_key",
]
