"""
Text documents — line-addressable buffers that accept a batch of
replace-range edits as one all-or-nothing transaction.

``TextDocument`` keeps its content in memory; ``FileDocument`` adds
loading from and atomic writing back to a file on disk.
"""

from __future__ import annotations

import logging
import os
import shutil
from bisect import bisect_right
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Position:
    """0-indexed line and character."""
    line: int
    character: int = 0


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class TextEdit:
    """Replace ``range`` with ``new_text``."""
    range: Range
    new_text: str


class TextDocument:
    """In-memory text buffer with a line/offset mapping.

    Positions outside the document are clamped: a negative line maps to
    offset 0, a line past the last one maps to the end of the text, and a
    character past the end of its line maps to the end of that line.
    """

    def __init__(self, text: str = "", uri: str = "untitled") -> None:
        self.uri = uri
        self.version = 0
        self._set_text(text)

    def _set_text(self, text: str) -> None:
        self._text = text
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    @property
    def text(self) -> str:
        return self._text

    @property
    def eol(self) -> str:
        """Line terminator of the text, taken from its first line break."""
        first = self._text.find("\n")
        if first > 0 and self._text[first - 1] == "\r":
            return "\r\n"
        return "\n"

    @property
    def line_count(self) -> int:
        """Number of lines; a trailing newline starts one more (empty) line."""
        return len(self._line_starts)

    def line_at(self, line: int) -> str:
        """Content of *line* without its line break."""
        if line < 0 or line >= self.line_count:
            raise IndexError(f"line {line} out of range (0..{self.line_count - 1})")
        return self._text[self._line_starts[line]:self._line_end(line)]

    def _line_end(self, line: int) -> int:
        if line + 1 < self.line_count:
            return self._line_starts[line + 1] - 1
        return len(self._text)

    def offset_at(self, position: Position) -> int:
        """Absolute character offset of *position*, clamped to the text."""
        if position.line < 0:
            return 0
        if position.line >= self.line_count:
            return len(self._text)
        start = self._line_starts[position.line]
        length = self._line_end(position.line) - start
        return start + min(max(position.character, 0), length)

    def position_at(self, offset: int) -> Position:
        """Line/character of *offset*, clamped to the text."""
        offset = min(max(offset, 0), len(self._text))
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def validate_position(self, position: Position) -> Position:
        return self.position_at(self.offset_at(position))

    def apply_edits(self, edits: list[TextEdit], version: int | None = None) -> bool:
        """Apply *edits* as one transaction.

        All ranges are resolved against the text as it is before the
        batch. Returns False, leaving the document untouched, if
        *version* is given and no longer current or if any two edits
        overlap.
        """
        if version is not None and version != self.version:
            logger.warning(
                "[SmartPaste] Rejecting edits for %s: version %d is stale "
                "(current %d)", self.uri, version, self.version,
            )
            return False

        new_text = self._compose(edits)
        if new_text is None:
            return False

        self._commit(new_text)
        return True

    def _compose(self, edits: list[TextEdit]) -> str | None:
        """Build the post-edit text, or None if the batch is invalid."""
        spans = []
        for index, edit in enumerate(edits):
            start = self.offset_at(edit.range.start)
            end = self.offset_at(edit.range.end)
            if end < start:
                logger.warning(
                    "[SmartPaste] Rejecting edits for %s: inverted range %s",
                    self.uri, edit.range,
                )
                return None
            spans.append((start, end, index, edit.new_text))

        # Empty ranges sort before a range starting at the same offset;
        # ties keep submission order.
        spans.sort(key=lambda span: (span[0], span[1], span[2]))

        pieces: list[str] = []
        cursor = 0
        for start, end, _, new_text in spans:
            if start < cursor:
                logger.warning(
                    "[SmartPaste] Rejecting edits for %s: overlapping ranges "
                    "at offset %d", self.uri, start,
                )
                return None
            pieces.append(self._text[cursor:start])
            pieces.append(new_text)
            cursor = end
        pieces.append(self._text[cursor:])
        return "".join(pieces)

    def _commit(self, new_text: str) -> None:
        self._set_text(new_text)
        self.version += 1


class FileDocument(TextDocument):
    """A document backed by a file on disk.

    Edits are refused if the file changed on disk since it was loaded;
    accepted edits are written atomically via a temp file and rename.
    """

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        self.path = os.path.abspath(path)
        self.encoding = encoding
        with open(self.path, "r", encoding=encoding, newline="") as f:
            text = f.read()
        super().__init__(text, uri=self.path)

    @classmethod
    def open(cls, path: str, encoding: str = "utf-8") -> "FileDocument | None":
        """Load *path*, or return None if it cannot be read."""
        try:
            return cls(path, encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("[SmartPaste] Cannot open %s: %s", path, exc)
            return None

    def apply_edits(self, edits: list[TextEdit], version: int | None = None) -> bool:
        if version is not None and version != self.version:
            logger.warning(
                "[SmartPaste] Rejecting edits for %s: version %d is stale "
                "(current %d)", self.uri, version, self.version,
            )
            return False

        try:
            with open(self.path, "r", encoding=self.encoding, newline="") as f:
                on_disk = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("[SmartPaste] Cannot re-read %s: %s", self.path, exc)
            return False
        if on_disk != self.text:
            logger.warning(
                "[SmartPaste] %s changed on disk since it was opened", self.path
            )
            return False

        new_text = self._compose(edits)
        if new_text is None:
            return False

        try:
            self._safe_write(new_text)
        except OSError as exc:
            logger.error("[SmartPaste] Write failed for %s: %s", self.path, exc)
            return False

        self._commit(new_text)
        return True

    def _safe_write(self, content: str) -> None:
        """Write content to the file atomically via temp file + rename."""
        tmp_path = self.path + ".smartpaste_tmp"
        try:
            with open(tmp_path, "w", encoding=self.encoding, newline="") as f:
                f.write(content)
            shutil.move(tmp_path, self.path)
        except OSError:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
