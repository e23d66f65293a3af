"""Command-line front door for hunkselect.

Reads a unified diff, builds a selection model over it, replays key tokens
through the selection keymap, and prints the diff with selected lines marked.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .diff_model import DiffTree
from .input import SelectionKeymap
from .selection import SelectionMode, SelectionModel, iter_line_states

SELECTED_GUTTER = "> "
UNSELECTED_GUTTER = "  "


def read_text(path: Path) -> str:
    """Read diff text, falling back through common encodings."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_text(encoding="utf-8", errors="replace")


def _format_position(position: tuple[int, ...]) -> str:
    return "(" + ", ".join("-" if part is None else str(part) for part in position) + ")"


def render_selection(selection: SelectionModel, diff_tree: DiffTree) -> str:
    """Render the diff as plain text with a gutter marker on selected lines."""
    states = iter_line_states(selection, diff_tree)
    out: list[str] = []
    for file_diff in diff_tree.get_file_diffs():
        out.append(f"== {file_diff.path}")
        for hunk in file_diff.hunks:
            out.append(hunk.header)
            for line in hunk.lines:
                state = next(states)
                gutter = SELECTED_GUTTER if state.is_selected else UNSELECTED_GUTTER
                out.append(f"{gutter}{line.origin}{line.content}")

    low, high = selection.get_range()
    out.append(f"mode={selection.get_mode().value} range={_format_position(low)}..{_format_position(high)}")
    return "\n".join(out) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Replay selection keys over a unified diff and print the selected lines."
    )
    parser.add_argument("path", nargs="?", default=None, help="Diff file to read. Defaults to stdin.")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SelectionMode],
        default=None,
        help="Initial selection mode (default: configured mode, else hunk).",
    )
    parser.add_argument(
        "--keys",
        default="",
        help="Whitespace-separated key tokens to replay, e.g. 'j j TAB J'.",
    )
    parser.add_argument("--save-mode", action="store_true", help="Persist --mode as the default mode.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, replay keys, and print the resulting selection."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.save_mode:
        if args.mode is None:
            raise SystemExit("--save-mode requires --mode.")
        config.save_default_mode(args.mode)

    if args.path is None or args.path == "-":
        diff_text = sys.stdin.read()
    else:
        path = Path(args.path)
        if not path.is_file():
            raise SystemExit(f"Path not found: {path}")
        diff_text = read_text(path)

    diff_tree = DiffTree.from_unified_diff(diff_text)
    if diff_tree.hunk_count() == 0:
        raise SystemExit("No hunks found in diff.")

    mode = SelectionMode(args.mode) if args.mode is not None else config.load_default_mode()
    selection = SelectionModel(diff_tree)
    # Switch after construction so line mode anchors on the first changed line.
    selection.set_mode(mode)

    keymap = SelectionKeymap(selection, config.load_key_binding_overrides())
    unknown = keymap.handle_keys(args.keys.split())
    if unknown:
        raise SystemExit(f"Unknown key: {unknown[0]!r}")

    sys.stdout.write(render_selection(selection, diff_tree))


if __name__ == "__main__":
    main()
