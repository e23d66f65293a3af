"""Head/tail selection over a files -> hunks -> lines diff tree.

``SelectionModel`` keeps an active head position, an optional tail anchor,
and a selection mode. Navigation steps by hunk in hunk mode and by changed
line in line mode, crossing hunk and file boundaries and clamping at both
ends of the tree. Every walk re-reads the provider, so tree replacements
between calls are picked up on the next call.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol

from .events import Disposable, Emitter
from .position import (
    LinePosition,
    Position,
    SelectionMode,
    compare_positions,
    hunk_position_of,
    line_index_of,
    position_sort_key,
)

logger = logging.getLogger(__name__)


class ChangedLineLike(Protocol):
    @property
    def is_changed(self) -> bool: ...


class HunkLike(Protocol):
    @property
    def lines(self) -> Sequence[ChangedLineLike]: ...


class FileDiffLike(Protocol):
    @property
    def hunks(self) -> Sequence[HunkLike]: ...


class DiffTreeProvider(Protocol):
    """Anything that can hand out the current ordered file diffs."""

    def get_file_diffs(self) -> Sequence[FileDiffLike]: ...


class SelectionLike(Protocol):
    """Minimal surface needed to order selections."""

    def get_range(self) -> tuple[Position, Position]: ...


def _range_start_key(selection: SelectionLike):
    return position_sort_key(selection.get_range()[0])


def sort_selections_ascending(selections: Iterable[SelectionLike]) -> list[SelectionLike]:
    """Return a new list ordered by each selection's low endpoint."""
    return sorted(selections, key=_range_start_key)


def sort_selections_descending(selections: Iterable[SelectionLike]) -> list[SelectionLike]:
    """Return a new list ordered by low endpoint, last position first."""
    return sorted(selections, key=_range_start_key, reverse=True)


class SelectionModel:
    """Selection state and keyboard-style navigation for one diff view."""

    sort_selections_ascending = staticmethod(sort_selections_ascending)
    sort_selections_descending = staticmethod(sort_selections_descending)

    def __init__(
        self,
        diff_tree: DiffTreeProvider,
        mode: SelectionMode | str = SelectionMode.HUNK,
        head_position: Position | None = None,
        tail_position: Position | None = None,
    ) -> None:
        self.diff_tree = diff_tree
        self.emitter = Emitter()
        self.mode = SelectionMode.coerce(mode)
        self.head_position: Position = head_position if head_position is not None else (0, 0)
        self.tail_position: Position | None = tail_position

    def __repr__(self) -> str:
        return (
            f"SelectionModel(mode={self.mode.value!r}, head={self.head_position!r}, "
            f"tail={self.tail_position!r})"
        )

    # Range and endpoints

    def get_range(self) -> tuple[Position, Position]:
        """Return ``(low, high)`` of head and tail in ascending order."""
        low, high = sorted((self.get_head_position(), self.get_tail_position()), key=position_sort_key)
        return low, high

    def get_head_position(self) -> Position:
        return self.head_position

    def set_head_position(self, head_position: Position) -> None:
        self.head_position = head_position
        self.emit_change_event()

    def get_tail_position(self) -> Position:
        """Return the tail anchor, or the head for point selections."""
        if self.tail_position is None:
            return self.head_position
        return self.tail_position

    def set_tail_position(self, tail_position: Position | None) -> None:
        self.tail_position = tail_position
        self.emit_change_event()

    def get_file_diffs(self) -> Sequence[FileDiffLike]:
        return self.diff_tree.get_file_diffs()

    # Mode

    def get_mode(self) -> SelectionMode:
        return self.mode

    def toggle_mode(self) -> None:
        next_mode = SelectionMode.LINE if self.mode is SelectionMode.HUNK else SelectionMode.HUNK
        self.set_mode(next_mode)

    def set_mode(self, mode: SelectionMode | str) -> None:
        """Switch granularity; no notification when the mode is unchanged.

        Entering line mode anchors positions on changed lines. A point
        selection lands on the first changed line of the head's hunk. A range
        is widened so it spans every changed line of its first and last hunks.
        """
        mode = SelectionMode.coerce(mode)
        if mode is self.mode:
            return

        logger.debug("selection mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode
        if mode is SelectionMode.LINE:
            if self.tail_position is None:
                self.head_position = self._first_changed_line_position(self.head_position)
            else:
                self._anchor_range_to_changed_lines()

        self.emit_change_event()

    def _first_changed_line_position(self, position: Position) -> LinePosition:
        file_index, hunk_index = hunk_position_of(position)
        return (file_index, hunk_index, self.get_first_changed_line_in_hunk(position) or 0)

    def _last_changed_line_position(self, position: Position) -> LinePosition:
        file_index, hunk_index = hunk_position_of(position)
        return (file_index, hunk_index, self.get_last_changed_line_in_hunk(position) or 0)

    def _anchor_range_to_changed_lines(self) -> None:
        tail_position = self.get_tail_position()
        if compare_positions(self.head_position, tail_position) <= 0:
            self.head_position = self._first_changed_line_position(self.head_position)
            self.tail_position = self._last_changed_line_position(tail_position)
        else:
            self.tail_position = self._first_changed_line_position(tail_position)
            self.head_position = self._last_changed_line_position(self.head_position)

    # Movement

    def move_up(self) -> None:
        """Collapse to the low end of the range, then step back."""
        self.head_position = self.get_range()[0]
        self.tail_position = None
        self.move_head_up()

    def expand_up(self) -> None:
        if self.tail_position is None:
            self.tail_position = self.head_position
        self.move_head_up()

    def move_down(self) -> None:
        """Collapse to the high end of the range, then step forward."""
        self.head_position = self.get_range()[1]
        self.tail_position = None
        self.move_head_down()

    def expand_down(self) -> None:
        if self.tail_position is None:
            self.tail_position = self.head_position
        self.move_head_down()

    def move_head_up(self) -> None:
        # Notifies even when clamped at the start of the tree.
        if self.mode is SelectionMode.HUNK:
            self.head_position = self.get_previous_hunk_position(self.head_position)
        else:
            self.head_position = self.get_previous_changed_line_position(self.head_position)
        self.emit_change_event()

    def move_head_down(self) -> None:
        # Notifies even when clamped at the end of the tree.
        if self.mode is SelectionMode.HUNK:
            self.head_position = self.get_next_hunk_position(self.head_position)
        else:
            self.head_position = self.get_next_changed_line_position(self.head_position)
        self.emit_change_event()

    # Hunk walk

    def get_previous_hunk_position(self, hunk_position: Position) -> Position:
        file_index, hunk_index = hunk_position_of(hunk_position)
        if hunk_index - 1 >= 0:
            return (file_index, hunk_index - 1)
        if file_index - 1 >= 0:
            previous_hunks = self.get_file_diffs()[file_index - 1].hunks
            return (file_index - 1, len(previous_hunks) - 1)
        return hunk_position

    def get_next_hunk_position(self, hunk_position: Position) -> Position:
        file_index, hunk_index = hunk_position_of(hunk_position)
        file_diffs = self.get_file_diffs()
        if hunk_index + 1 < len(file_diffs[file_index].hunks):
            return (file_index, hunk_index + 1)
        if file_index + 1 < len(file_diffs):
            return (file_index + 1, 0)
        return hunk_position

    # Changed-line walk

    def get_previous_changed_line_position(self, line_position: Position) -> Position:
        """Return the closest changed line before ``line_position``.

        Falls back to the last changed line of the previous hunk, then of the
        previous file's last hunk. A fallback hunk without changed lines yields
        line 0. Returns ``line_position`` unchanged at the start of the tree.
        """
        file_index, hunk_index = hunk_position_of(line_position)
        previous_line_index = self.get_previous_changed_line_in_hunk(line_position)
        if previous_line_index is not None:
            return (file_index, hunk_index, previous_line_index)
        if hunk_index - 1 >= 0:
            return self._last_changed_line_position((file_index, hunk_index - 1))
        if file_index - 1 >= 0:
            last_hunk_index = len(self.get_file_diffs()[file_index - 1].hunks) - 1
            return self._last_changed_line_position((file_index - 1, last_hunk_index))
        return line_position

    def get_next_changed_line_position(self, line_position: Position) -> Position:
        """Return the closest changed line after ``line_position``.

        Falls back to the first changed line of the next hunk, then of the next
        file's first hunk (line 0 when that hunk has none). Returns
        ``line_position`` unchanged at the end of the tree.
        """
        file_index, hunk_index = hunk_position_of(line_position)
        file_diffs = self.get_file_diffs()
        next_line_index = self.get_next_changed_line_in_hunk(line_position)
        if next_line_index is not None:
            return (file_index, hunk_index, next_line_index)
        if hunk_index + 1 < len(file_diffs[file_index].hunks):
            return self._first_changed_line_position((file_index, hunk_index + 1))
        if file_index + 1 < len(file_diffs):
            return self._first_changed_line_position((file_index + 1, 0))
        return line_position

    def get_first_changed_line_in_hunk(self, hunk_position: Position) -> int | None:
        file_index, hunk_index = hunk_position_of(hunk_position)
        return self.get_next_changed_line_in_hunk((file_index, hunk_index, -1))

    def get_last_changed_line_in_hunk(self, hunk_position: Position) -> int | None:
        file_index, hunk_index = hunk_position_of(hunk_position)
        return self.get_previous_changed_line_in_hunk((file_index, hunk_index, sys.maxsize))

    def _hunk_lines(self, position: Position) -> Sequence[ChangedLineLike]:
        return self.get_file_diffs()[position[0]].hunks[position[1]].lines

    def get_next_changed_line_in_hunk(self, line_position: Position) -> int | None:
        """Scan forward from just after the line index; ``None`` index starts before line 0."""
        lines = self._hunk_lines(line_position)
        line_index = line_index_of(line_position)
        start = 0 if line_index is None else max(0, line_index + 1)
        for index in range(start, len(lines)):
            if lines[index].is_changed:
                return index
        return None

    def get_previous_changed_line_in_hunk(self, line_position: Position) -> int | None:
        """Scan backward from just before the line index; ``None`` index starts after the end."""
        lines = self._hunk_lines(line_position)
        line_index = line_index_of(line_position)
        start = len(lines) if line_index is None else min(len(lines), line_index)
        for index in range(start - 1, -1, -1):
            if lines[index].is_changed:
                return index
        return None

    # Change notification

    def on_did_change(self, callback: Callable[[], object]) -> Disposable:
        return self.emitter.subscribe(callback)

    def emit_change_event(self) -> None:
        self.emitter.emit()


__all__ = [
    "DiffTreeProvider",
    "SelectionLike",
    "SelectionModel",
    "sort_selections_ascending",
    "sort_selections_descending",
]
