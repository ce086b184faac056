"""
Diff parser — turns loosely formatted unified-diff text (usually pasted
from a chat window or a code review) into an ordered list of hunks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Line prefixes inside a hunk body
ADDED = "+"
REMOVED = "-"
CONTEXT = " "

_HEADER_PREFIX = "@@"
_HEADER_PATTERN = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
)


@dataclass(frozen=True)
class DiffHunk:
    """One contiguous change region bounded by an ``@@ ... @@`` header."""
    old_start: int             # 1-indexed
    old_lines: int = 1
    new_start: int = 1
    new_lines: int = 1
    lines: tuple[str, ...] = field(default_factory=tuple)

    @property
    def header(self) -> str:
        return (
            f"@@ -{self.old_start},{self.old_lines} "
            f"+{self.new_start},{self.new_lines} @@"
        )

    @property
    def body_old_count(self) -> int:
        """Lines of the original document this body accounts for."""
        return sum(1 for line in self.lines if not line.startswith(ADDED))

    @property
    def body_new_count(self) -> int:
        """Lines of the resulting document this body accounts for."""
        return sum(1 for line in self.lines if not line.startswith(REMOVED))

    @property
    def is_insertion(self) -> bool:
        return self.old_lines == 0


def parse_header(line: str) -> tuple[int, int, int, int] | None:
    """Return ``(old_start, old_lines, new_start, new_lines)`` or None."""
    match = _HEADER_PATTERN.match(line)
    if match is None:
        return None
    old_start, old_lines, new_start, new_lines = match.groups()
    return (
        int(old_start),
        int(old_lines) if old_lines is not None else 1,
        int(new_start),
        int(new_lines) if new_lines is not None else 1,
    )


class DiffParser:
    """Lenient single-pass unified-diff parser.

    Never raises on malformed input: lines outside any hunk are skipped,
    ``@@`` lines that are not valid headers are dropped, and declared line
    counts are not checked against the body (see
    :func:`line_count_mismatches`).
    """

    def parse(self, text: str) -> list[DiffHunk]:
        """Parse *text* into hunks, in the order their headers appear.

        Parameters
        ----------
        text:
            Raw diff text. ``\\n`` and ``\\r\\n`` line endings are accepted.

        Returns
        -------
        list[DiffHunk]
            Parsed hunks; empty if no line matched the header pattern.
        """
        hunks: list[DiffHunk] = []
        header: tuple[int, int, int, int] | None = None
        body: list[str] = []

        for line in self._split_lines(text):
            if line.startswith(_HEADER_PREFIX):
                fields = parse_header(line)
                if fields is None:
                    logger.debug("[SmartPaste] Dropping malformed header: %r", line)
                    continue
                if header is not None:
                    hunks.append(self._make_hunk(header, body))
                header, body = fields, []
            elif header is not None:
                body.append(line)

        if header is not None:
            hunks.append(self._make_hunk(header, body))

        logger.debug("[SmartPaste] Parsed %d hunk(s)", len(hunks))
        return hunks

    @staticmethod
    def _split_lines(text: str) -> list[str]:
        """Split on line feeds; a final line feed ends the last line."""
        if not text:
            return []
        lines = text.replace("\r\n", "\n").split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    @staticmethod
    def _make_hunk(fields: tuple[int, int, int, int], body: list[str]) -> DiffHunk:
        old_start, old_lines, new_start, new_lines = fields
        return DiffHunk(
            old_start=old_start,
            old_lines=old_lines,
            new_start=new_start,
            new_lines=new_lines,
            lines=tuple(body),
        )


def parse_diff(text: str) -> list[DiffHunk]:
    """Module-level shortcut for ``DiffParser().parse(text)``."""
    return DiffParser().parse(text)


def line_count_mismatches(hunks: list[DiffHunk]) -> list[str]:
    """Describe hunks whose body disagrees with their header counts.

    Mismatches are advisory: the applier always replaces ``old_lines``
    lines regardless of what the body holds.
    """
    problems: list[str] = []
    for index, hunk in enumerate(hunks, start=1):
        if hunk.body_old_count != hunk.old_lines:
            problems.append(
                f"Hunk {index} ({hunk.header}) declares {hunk.old_lines} "
                f"original line(s) but its body has {hunk.body_old_count}"
            )
        if hunk.body_new_count != hunk.new_lines:
            problems.append(
                f"Hunk {index} ({hunk.header}) declares {hunk.new_lines} "
                f"new line(s) but its body has {hunk.body_new_count}"
            )
    for problem in problems:
        logger.warning("[SmartPaste] %s", problem)
    return problems
