"""Read unified diff text (``git diff`` output) into a diff tree.

The reader is tolerant: headers it does not understand, index and mode lines,
and binary notices are skipped. Hunk bodies are delimited by the line counts
in their ``@@`` headers, so removed lines that look like ``--- `` headers are
still read as hunk lines.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .types import ADDITION, CONTEXT, DELETION, DiffHunk, FileDiff, HunkLine

logger = logging.getLogger(__name__)

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_DIFF_GIT_RE = re.compile(r"^diff --git a/(.+?) b/(.+)$")
_NULL_PATH = "/dev/null"


def _parse_header_path(raw: str) -> str | None:
    """Normalize a ``---``/``+++`` path, dropping timestamps and a/ b/ prefixes."""
    path = raw.split("\t", 1)[0].strip()
    if not path or path == _NULL_PATH:
        return None
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


@dataclass
class _HunkBuilder:
    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    old_remaining: int
    new_remaining: int
    next_old: int
    next_new: int
    lines: list[HunkLine] = field(default_factory=list)

    @classmethod
    def from_header(cls, header: str, match: re.Match[str]) -> _HunkBuilder:
        old_start = int(match.group(1))
        old_count = int(match.group(2) or "1")
        new_start = int(match.group(3))
        new_count = int(match.group(4) or "1")
        return cls(
            header=header,
            old_start=old_start,
            old_count=old_count,
            new_start=new_start,
            new_count=new_count,
            old_remaining=old_count,
            new_remaining=new_count,
            next_old=old_start,
            next_new=new_start,
        )

    @property
    def is_complete(self) -> bool:
        return self.old_remaining <= 0 and self.new_remaining <= 0

    def add_line(self, raw_line: str) -> bool:
        """Consume one body line; return ``False`` when it does not belong to the hunk."""
        origin = raw_line[:1] or CONTEXT
        content = raw_line[1:]
        if origin == ADDITION and self.new_remaining > 0:
            self.lines.append(HunkLine(ADDITION, content, None, self.next_new))
            self.next_new += 1
            self.new_remaining -= 1
            return True
        if origin == DELETION and self.old_remaining > 0:
            self.lines.append(HunkLine(DELETION, content, self.next_old, None))
            self.next_old += 1
            self.old_remaining -= 1
            return True
        if origin == CONTEXT and self.old_remaining > 0 and self.new_remaining > 0:
            self.lines.append(HunkLine(CONTEXT, content, self.next_old, self.next_new))
            self.next_old += 1
            self.next_new += 1
            self.old_remaining -= 1
            self.new_remaining -= 1
            return True
        return False

    def build(self) -> DiffHunk:
        return DiffHunk(
            header=self.header,
            old_start=self.old_start,
            old_count=self.old_count,
            new_start=self.new_start,
            new_count=self.new_count,
            lines=tuple(self.lines),
        )


@dataclass
class _FileBuilder:
    old_path: str | None = None
    new_path: str | None = None
    saw_old_header: bool = False
    hunks: list[DiffHunk] = field(default_factory=list)

    def build(self) -> FileDiff:
        return FileDiff(old_path=self.old_path, new_path=self.new_path, hunks=tuple(self.hunks))


def parse_unified_diff(diff_text: str, keep_empty_files: bool = False) -> list[FileDiff]:
    """Parse unified diff text into file diffs in input order.

    Files without any hunk (pure renames, mode changes, binary files) are
    dropped unless ``keep_empty_files`` is set.
    """
    files: list[FileDiff] = []
    current_file: _FileBuilder | None = None
    current_hunk: _HunkBuilder | None = None

    def _finish_hunk() -> None:
        nonlocal current_hunk
        if current_hunk is not None and current_file is not None:
            if not current_hunk.is_complete:
                logger.debug("hunk %r ended before its declared line counts", current_hunk.header)
            current_file.hunks.append(current_hunk.build())
        current_hunk = None

    def _finish_file() -> None:
        nonlocal current_file
        _finish_hunk()
        if current_file is not None and (current_file.hunks or keep_empty_files):
            files.append(current_file.build())
        current_file = None

    for raw_line in diff_text.splitlines():
        if current_hunk is not None:
            if raw_line.startswith("\\"):
                # "\ No newline at end of file"
                continue
            if not current_hunk.is_complete and current_hunk.add_line(raw_line):
                continue
            _finish_hunk()

        git_match = _DIFF_GIT_RE.match(raw_line)
        if git_match:
            _finish_file()
            current_file = _FileBuilder(old_path=git_match.group(1), new_path=git_match.group(2))
            continue

        if raw_line.startswith("--- "):
            if current_file is None or current_file.saw_old_header or current_file.hunks:
                _finish_file()
                current_file = _FileBuilder()
            current_file.old_path = _parse_header_path(raw_line[4:])
            current_file.saw_old_header = True
            continue

        if raw_line.startswith("+++ "):
            if current_file is None:
                current_file = _FileBuilder()
            current_file.new_path = _parse_header_path(raw_line[4:])
            continue

        hunk_match = _HUNK_RE.match(raw_line)
        if hunk_match:
            if current_file is None:
                current_file = _FileBuilder()
            current_hunk = _HunkBuilder.from_header(raw_line, hunk_match)
            continue

        if raw_line.strip():
            logger.debug("skipping diff line outside hunks: %r", raw_line)

    _finish_file()
    return files


__all__ = ["parse_unified_diff"]
