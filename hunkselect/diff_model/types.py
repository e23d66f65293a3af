"""Read-only diff tree datatypes: files, hunks, and lines."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

ADDITION = "+"
DELETION = "-"
CONTEXT = " "


@dataclass(frozen=True)
class HunkLine:
    """One line of a hunk with its origin marker and line numbers."""

    origin: str
    content: str
    old_line_number: int | None = None
    new_line_number: int | None = None
    staged: bool = False

    @property
    def is_addition(self) -> bool:
        return self.origin == ADDITION

    @property
    def is_deletion(self) -> bool:
        return self.origin == DELETION

    @property
    def is_changed(self) -> bool:
        return self.is_addition or self.is_deletion


@dataclass(frozen=True)
class DiffHunk:
    """Hunk header metadata plus its ordered lines."""

    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: tuple[HunkLine, ...] = ()

    def changed_line_count(self) -> int:
        return sum(1 for line in self.lines if line.is_changed)


@dataclass(frozen=True)
class FileDiff:
    """Hunks for one file; a ``None`` path side means added or deleted file."""

    old_path: str | None
    new_path: str | None
    hunks: tuple[DiffHunk, ...] = ()

    @property
    def path(self) -> str:
        return self.new_path or self.old_path or ""


class DiffTree:
    """Mutable holder for the current file diffs of one view.

    Selection models keep a reference to the tree and re-read
    ``get_file_diffs`` on every call, so ``replace_file_diffs`` is picked up
    without rebuilding them.
    """

    def __init__(self, file_diffs: Sequence[FileDiff] = ()) -> None:
        self._file_diffs: tuple[FileDiff, ...] = tuple(file_diffs)

    @classmethod
    def from_unified_diff(cls, diff_text: str) -> DiffTree:
        from .parse import parse_unified_diff

        return cls(parse_unified_diff(diff_text))

    def get_file_diffs(self) -> tuple[FileDiff, ...]:
        return self._file_diffs

    def replace_file_diffs(self, file_diffs: Sequence[FileDiff]) -> None:
        self._file_diffs = tuple(file_diffs)

    def hunk_count(self) -> int:
        return sum(len(file_diff.hunks) for file_diff in self._file_diffs)

    def line_count(self) -> int:
        return sum(len(hunk.lines) for file_diff in self._file_diffs for hunk in file_diff.hunks)

    def __len__(self) -> int:
        return len(self._file_diffs)


__all__ = [
    "ADDITION",
    "CONTEXT",
    "DELETION",
    "DiffHunk",
    "DiffTree",
    "FileDiff",
    "HunkLine",
]
