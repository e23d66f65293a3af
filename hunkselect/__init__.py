"""Public package surface for hunkselect.

Exports the selection model, the diff tree types it navigates, and ``main``
for programmatic CLI invocation.
"""

from __future__ import annotations

from .diff_model import DiffHunk, DiffTree, FileDiff, HunkLine, parse_unified_diff
from .selection import (
    Position,
    SelectionMode,
    SelectionModel,
    compare_positions,
    sort_selections_ascending,
    sort_selections_descending,
)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DiffHunk",
    "DiffTree",
    "FileDiff",
    "HunkLine",
    "Position",
    "SelectionMode",
    "SelectionModel",
    "compare_positions",
    "main",
    "parse_unified_diff",
    "sort_selections_ascending",
    "sort_selections_descending",
]
