"""Selection state over a three-level diff tree.

This package contains the non-UI selection primitives:
- positions, selection modes, and their ordering
- the per-instance change emitter
- the head/tail selection model and its navigation walks
- derived per-line state for renderers
"""

from __future__ import annotations

from .events import Disposable, Emitter
from .line_state import HunkLineState, hunk_line_state, iter_line_states, line_is_selected
from .model import (
    DiffTreeProvider,
    SelectionLike,
    SelectionModel,
    sort_selections_ascending,
    sort_selections_descending,
)
from .position import (
    HunkPosition,
    LinePosition,
    Position,
    SelectionMode,
    compare_positions,
    hunk_position_of,
    line_index_of,
    position_sort_key,
)

__all__ = [
    "Disposable",
    "Emitter",
    "HunkLineState",
    "hunk_line_state",
    "iter_line_states",
    "line_is_selected",
    "DiffTreeProvider",
    "SelectionLike",
    "SelectionModel",
    "sort_selections_ascending",
    "sort_selections_descending",
    "HunkPosition",
    "LinePosition",
    "Position",
    "SelectionMode",
    "compare_positions",
    "hunk_position_of",
    "line_index_of",
    "position_sort_key",
]
