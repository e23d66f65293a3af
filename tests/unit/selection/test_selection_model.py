"""Tests for selection ranges, mode switching, movement, and notifications.

Uses small in-memory trees where each hunk is spelled as origin markers:
``c`` for context, ``+`` for additions, ``-`` for deletions.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace

from hunkselect.diff_model import DiffHunk, DiffTree, FileDiff, HunkLine
from hunkselect.selection.model import (
    SelectionModel,
    sort_selections_ascending,
    sort_selections_descending,
)
from hunkselect.selection.position import SelectionMode


def _hunk(markers: str) -> DiffHunk:
    lines = tuple(HunkLine(" " if marker == "c" else marker, f"line {index}") for index, marker in enumerate(markers))
    return DiffHunk(header="@@ -1 +1 @@", old_start=1, old_count=1, new_start=1, new_count=1, lines=lines)


def _tree(*files: list[str]) -> DiffTree:
    return DiffTree(
        [FileDiff(f"f{index}.py", f"f{index}.py", tuple(_hunk(markers) for markers in hunks)) for index, hunks in enumerate(files)]
    )


def _sample_tree() -> DiffTree:
    return _tree(["c+c-c", "cc", "+c"], ["cc+"])


def _counting(selection: SelectionModel) -> list[int]:
    calls: list[int] = []
    selection.on_did_change(lambda: calls.append(1))
    return calls


class SelectionRangeTests(unittest.TestCase):
    def test_defaults(self) -> None:
        selection = SelectionModel(_sample_tree())
        self.assertIs(selection.get_mode(), SelectionMode.HUNK)
        self.assertEqual(selection.get_head_position(), (0, 0))
        self.assertIsNone(selection.tail_position)

    def test_point_selection_range_collapses_to_head(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 1, 2))
        self.assertEqual(selection.get_tail_position(), (0, 1, 2))
        self.assertEqual(selection.get_range(), ((0, 1, 2), (0, 1, 2)))

    def test_range_is_sorted_regardless_of_head_side(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(1, 0), tail_position=(0, 2))
        self.assertEqual(selection.get_range(), ((0, 2), (1, 0)))

        selection.set_head_position((0, 0, 3))
        selection.set_tail_position((0, 0, 1))
        self.assertEqual(selection.get_range(), ((0, 0, 1), (0, 0, 3)))

    def test_range_keeps_head_first_when_comparator_ties(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 1), tail_position=(0, 1, 4))
        self.assertEqual(selection.get_range(), ((0, 1), (0, 1, 4)))

    def test_clearing_tail_returns_to_point_selection(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 1), tail_position=(0, 0))
        selection.set_tail_position(None)
        self.assertEqual(selection.get_range(), ((0, 1), (0, 1)))

    def test_mode_accepts_string_value(self) -> None:
        selection = SelectionModel(_sample_tree(), mode="line", head_position=(0, 0, 1))
        self.assertIs(selection.get_mode(), SelectionMode.LINE)


class SelectionModeTests(unittest.TestCase):
    def test_entering_line_mode_anchors_on_first_changed_line(self) -> None:
        selection = SelectionModel(_tree(["cc+c"]))
        selection.set_mode(SelectionMode.LINE)
        self.assertEqual(selection.get_head_position(), (0, 0, 2))

    def test_entering_line_mode_in_hunk_without_changes_uses_line_zero(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 1))
        selection.toggle_mode()
        self.assertIs(selection.get_mode(), SelectionMode.LINE)
        self.assertEqual(selection.get_head_position(), (0, 1, 0))

    def test_entering_line_mode_ignores_stale_line_component(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 0, 4))
        selection.set_mode("line")
        self.assertEqual(selection.get_head_position(), (0, 0, 1))

    def test_entering_line_mode_with_tail_spans_changed_lines_of_both_hunks(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 2), tail_position=(0, 0))
        selection.set_mode(SelectionMode.LINE)
        self.assertEqual(selection.get_tail_position(), (0, 0, 1))
        self.assertEqual(selection.get_head_position(), (0, 2, 0))

        selection = SelectionModel(_sample_tree(), head_position=(0, 0), tail_position=(1, 0))
        selection.set_mode(SelectionMode.LINE)
        self.assertEqual(selection.get_head_position(), (0, 0, 1))
        self.assertEqual(selection.get_tail_position(), (1, 0, 2))

    def test_entering_hunk_mode_keeps_positions(self) -> None:
        selection = SelectionModel(_sample_tree(), mode=SelectionMode.LINE, head_position=(0, 0, 3))
        selection.toggle_mode()
        self.assertIs(selection.get_mode(), SelectionMode.HUNK)
        self.assertEqual(selection.get_head_position(), (0, 0, 3))

    def test_setting_same_mode_does_not_notify(self) -> None:
        selection = SelectionModel(_sample_tree())
        calls = _counting(selection)
        selection.set_mode(SelectionMode.HUNK)
        self.assertEqual(calls, [])

        selection.set_mode(SelectionMode.LINE)
        self.assertEqual(calls, [1])


class SelectionMovementTests(unittest.TestCase):
    def test_move_down_collapses_range_to_high_end_then_steps(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 0), tail_position=(0, 1))
        selection.move_down()
        self.assertEqual(selection.get_head_position(), (0, 2))
        self.assertIsNone(selection.tail_position)

    def test_move_up_collapses_range_to_low_end_then_steps(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 1), tail_position=(1, 0))
        selection.move_up()
        self.assertEqual(selection.get_head_position(), (0, 0))
        self.assertIsNone(selection.tail_position)

    def test_expand_up_anchors_tail_then_grows(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 2))
        selection.expand_up()
        self.assertEqual(selection.get_range(), ((0, 1), (0, 2)))
        selection.expand_up()
        self.assertEqual(selection.get_range(), ((0, 0), (0, 2)))

        selection.expand_down()
        self.assertEqual(selection.get_range(), ((0, 1), (0, 2)))
        self.assertEqual(selection.tail_position, (0, 2))

    def test_expand_then_move_matches_two_head_steps(self) -> None:
        expanded = SelectionModel(_sample_tree())
        expanded.expand_down()
        expanded.move_down()

        stepped = SelectionModel(_sample_tree())
        stepped.move_head_down()
        stepped.move_head_down()

        self.assertEqual(expanded.get_head_position(), stepped.get_head_position())
        self.assertEqual(expanded.get_head_position(), (0, 2))
        self.assertIsNone(expanded.tail_position)

    def test_line_mode_movement_skips_context_lines(self) -> None:
        selection = SelectionModel(_sample_tree(), mode=SelectionMode.LINE, head_position=(0, 0, 1))
        selection.move_down()
        self.assertEqual(selection.get_head_position(), (0, 0, 3))
        selection.move_down()
        self.assertEqual(selection.get_head_position(), (0, 1, 0))
        selection.move_down()
        self.assertEqual(selection.get_head_position(), (0, 2, 0))
        selection.move_down()
        self.assertEqual(selection.get_head_position(), (1, 0, 2))
        selection.move_up()
        self.assertEqual(selection.get_head_position(), (0, 2, 0))

    def test_line_mode_expand_down_across_hunks(self) -> None:
        selection = SelectionModel(_sample_tree(), mode=SelectionMode.LINE, head_position=(0, 0, 3))
        selection.expand_down()
        self.assertEqual(selection.get_range(), ((0, 0, 3), (0, 1, 0)))


class SelectionNotificationTests(unittest.TestCase):
    def test_every_mutator_notifies_exactly_once(self) -> None:
        selection = SelectionModel(_sample_tree(), head_position=(0, 1))
        calls = _counting(selection)

        operations = [
            lambda: selection.set_head_position((0, 1)),
            lambda: selection.set_tail_position((0, 0)),
            lambda: selection.set_tail_position(None),
            selection.move_up,
            selection.move_down,
            selection.expand_up,
            selection.expand_down,
            selection.move_head_up,
            selection.move_head_down,
            selection.toggle_mode,
        ]
        for index, operation in enumerate(operations, start=1):
            operation()
            self.assertEqual(len(calls), index)

    def test_clamped_moves_still_notify(self) -> None:
        selection = SelectionModel(_sample_tree())
        calls = _counting(selection)

        selection.move_head_up()
        selection.move_up()

        self.assertEqual(selection.get_head_position(), (0, 0))
        self.assertEqual(len(calls), 2)

    def test_disposed_listener_is_not_called(self) -> None:
        selection = SelectionModel(_sample_tree())
        calls: list[int] = []
        handle = selection.on_did_change(lambda: calls.append(1))
        selection.move_down()
        handle.dispose()
        selection.move_down()
        self.assertEqual(calls, [1])

    def test_listener_observes_updated_state(self) -> None:
        selection = SelectionModel(_sample_tree())
        seen: list[object] = []
        selection.on_did_change(lambda: seen.append(selection.get_head_position()))
        selection.move_down()
        self.assertEqual(seen, [(0, 1)])


class SortSelectionsTests(unittest.TestCase):
    @staticmethod
    def _selection(low: tuple[int, ...]) -> SimpleNamespace:
        return SimpleNamespace(low=low, get_range=lambda: (low, low))

    def test_ascending_and_descending_order_by_low_endpoint(self) -> None:
        selections = [self._selection((1, 0)), self._selection((0, 2)), self._selection((0, 1))]

        ascending = sort_selections_ascending(selections)
        descending = sort_selections_descending(selections)

        self.assertEqual([item.low for item in ascending], [(0, 1), (0, 2), (1, 0)])
        self.assertEqual([item.low for item in descending], [(1, 0), (0, 2), (0, 1)])
        self.assertEqual([item.low for item in selections], [(1, 0), (0, 2), (0, 1)])

    def test_sorts_selection_models_by_range_start(self) -> None:
        tree = _sample_tree()
        late = SelectionModel(tree, head_position=(0, 2), tail_position=(1, 0))
        early = SelectionModel(tree, head_position=(0, 1), tail_position=(0, 0))

        self.assertEqual(SelectionModel.sort_selections_ascending([late, early]), [early, late])
        self.assertEqual(SelectionModel.sort_selections_descending([early, late]), [late, early])

    def test_comparator_ties_keep_input_order(self) -> None:
        hunk_level = self._selection((0, 1))
        line_level = self._selection((0, 1, 3))

        self.assertEqual(sort_selections_ascending([line_level, hunk_level]), [line_level, hunk_level])
        self.assertEqual(sort_selections_ascending([hunk_level, line_level]), [hunk_level, line_level])


if __name__ == "__main__":
    unittest.main()
