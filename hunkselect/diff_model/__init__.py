"""Read-only diff tree model plus a unified diff reader.

Selection models only need ``get_file_diffs`` from a tree; the datatypes here
are one concrete provider built from ``git diff`` output.
"""

from __future__ import annotations

from .parse import parse_unified_diff
from .types import ADDITION, CONTEXT, DELETION, DiffHunk, DiffTree, FileDiff, HunkLine

__all__ = [
    "ADDITION",
    "CONTEXT",
    "DELETION",
    "DiffHunk",
    "DiffTree",
    "FileDiff",
    "HunkLine",
    "parse_unified_diff",
]
