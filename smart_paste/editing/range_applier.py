"""
Range applier — converts parsed hunks into replace-range edits against a
document.

Every range is computed from the document as it is before any edit of
the batch lands, so the edits must be committed together as a single
transaction (``TextDocument.apply_edits``). Applying them one at a time
would shift the line numbers of every later hunk.
"""

from __future__ import annotations

import logging

from ..document import Position, Range, TextDocument, TextEdit
from ..errors import OverlappingHunksError
from .diff_parser import REMOVED, DiffHunk

logger = logging.getLogger(__name__)

OVERLAP_REJECT = "reject"
OVERLAP_ALLOW = "allow"
OVERLAP_POLICIES = (OVERLAP_REJECT, OVERLAP_ALLOW)


def build_replacement(hunk: DiffHunk, eol: str = "\n") -> str:
    """Text that replaces the hunk's original lines.

    Added and context lines are kept, removed lines are dropped, and the
    one-character prefix is stripped from each kept line. Kept lines are
    joined with *eol*.
    """
    kept = [line[1:] for line in hunk.lines if not line.startswith(REMOVED)]
    return eol.join(kept)


class RangeApplier:
    """Compute one ``TextEdit`` per hunk, in hunk order."""

    def __init__(self, overlap_policy: str = OVERLAP_REJECT) -> None:
        if overlap_policy not in OVERLAP_POLICIES:
            raise ValueError(
                f"Unknown overlap policy {overlap_policy!r}; "
                f"expected one of {', '.join(OVERLAP_POLICIES)}"
            )
        self._overlap_policy = overlap_policy

    def apply(self, document: TextDocument, hunks: list[DiffHunk]) -> list[TextEdit]:
        """Build the edit set for *hunks* against *document*.

        Parameters
        ----------
        document:
            The document in its current, pre-edit state.
        hunks:
            Parsed hunks, in header order.

        Returns
        -------
        list[TextEdit]
            One edit per hunk, in the same order.

        Raises
        ------
        OverlappingHunksError
            If the overlap policy is ``reject`` and two hunks cover
            overlapping parts of the original document.
        """
        edits = [self._edit_for(document, hunk) for hunk in hunks]

        if self._overlap_policy == OVERLAP_REJECT:
            self._check_overlaps(document, hunks, edits)

        logger.info(
            "[SmartPaste] Built %d edit(s) for %s", len(edits), document.uri
        )
        return edits

    def line_range(self, document: TextDocument, hunk: DiffHunk) -> Range:
        """Range of the hunk's original lines, including the final line break.

        The range starts at 0-based line ``old_start - 1`` for every hunk,
        so a zero-length hunk is an empty range at the start of that line.
        ``-0,0`` clamps to the top of the document.
        """
        start_line = hunk.old_start - 1
        start = document.validate_position(Position(start_line, 0))
        end = document.validate_position(Position(start_line + hunk.old_lines, 0))
        return Range(start, end)

    def _edit_for(self, document: TextDocument, hunk: DiffHunk) -> TextEdit:
        edit_range = self.line_range(document, hunk)
        has_body = any(not line.startswith(REMOVED) for line in hunk.lines)
        if not has_body:
            return TextEdit(edit_range, "")

        eol = document.eol
        text = build_replacement(hunk, eol)
        if edit_range.end.character == 0:
            # Range ends on a line start: the last replaced line break is
            # part of the range, so the replacement supplies its own.
            text += eol
        elif edit_range.is_empty:
            # Inserting after a final line that has no line break
            text = eol + text
        return TextEdit(edit_range, text)

    @staticmethod
    def _check_overlaps(
        document: TextDocument,
        hunks: list[DiffHunk],
        edits: list[TextEdit],
    ) -> None:
        spans = sorted(
            (
                document.offset_at(edit.range.start),
                document.offset_at(edit.range.end),
                index,
            )
            for index, edit in enumerate(edits)
        )
        previous: tuple[int, int, int] | None = None
        for span in spans:
            if previous is not None and span[0] < previous[1]:
                first, second = hunks[previous[2]], hunks[span[2]]
                logger.warning(
                    "[SmartPaste] Overlapping hunks: %s and %s",
                    first.header, second.header,
                )
                raise OverlappingHunksError(first, second)
            if previous is None or span[1] >= previous[1]:
                previous = span
