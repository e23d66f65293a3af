"""Derived per-line state for diff renderers.

Renderers read these values instead of reimplementing range checks: whether a
line is an addition or deletion, whether it is staged, and whether the current
selection covers it.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from .model import DiffTreeProvider, SelectionModel
from .position import LinePosition, Position, SelectionMode, line_index_of


@dataclass(frozen=True)
class HunkLineState:
    """View flags for one diff line."""

    position: LinePosition
    is_addition: bool
    is_deletion: bool
    is_selected: bool
    is_staged: bool

    def css_classes(self) -> tuple[str, ...]:
        """Return class tokens in the order line elements expect them."""
        classes: list[str] = []
        if self.is_addition:
            classes.append("addition")
        elif self.is_deletion:
            classes.append("deletion")
        if self.is_selected:
            classes.append("selected")
        if self.is_staged:
            classes.append("staged")
        return tuple(classes)


def _line_key(position: Position, missing: float) -> tuple[int, int, float]:
    line_index = line_index_of(position)
    return (position[0], position[1], missing if line_index is None else line_index)


def line_is_selected(selection: SelectionModel, position: LinePosition) -> bool:
    """Return whether ``position`` falls inside the selection.

    Hunk mode covers whole hunks from the low hunk to the high hunk. Line mode
    compares full coordinates; an endpoint without a line covers its hunk.
    """
    low, high = selection.get_range()
    if selection.get_mode() is SelectionMode.HUNK:
        return (low[0], low[1]) <= (position[0], position[1]) <= (high[0], high[1])
    target = _line_key(position, 0)
    return _line_key(low, -math.inf) <= target <= _line_key(high, math.inf)


def hunk_line_state(selection: SelectionModel, line: object, position: LinePosition) -> HunkLineState:
    return HunkLineState(
        position=position,
        is_addition=bool(getattr(line, "is_addition", False)),
        is_deletion=bool(getattr(line, "is_deletion", False)),
        is_selected=line_is_selected(selection, position),
        is_staged=bool(getattr(line, "staged", False)),
    )


def iter_line_states(
    selection: SelectionModel,
    diff_tree: DiffTreeProvider | None = None,
) -> Iterator[HunkLineState]:
    """Yield the state of every line in tree order."""
    provider = diff_tree if diff_tree is not None else selection.diff_tree
    for file_index, file_diff in enumerate(provider.get_file_diffs()):
        for hunk_index, hunk in enumerate(file_diff.hunks):
            for line_index, line in enumerate(hunk.lines):
                yield hunk_line_state(selection, line, (file_index, hunk_index, line_index))
