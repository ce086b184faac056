"""
smart_paste — apply a unified diff from the clipboard to an open document.

Public API for library usage::

    from smart_paste import parse_diff, render_preview, RangeApplier, TextDocument

    doc = TextDocument("foo\\nbaz\\n")
    hunks = parse_diff("@@ -1,2 +1,2 @@\\n-foo\\n+bar\\n baz\\n")
    doc.apply_edits(RangeApplier().apply(doc, hunks))
"""

from .document import Position, Range, TextEdit, TextDocument, FileDocument
from .editing import DiffHunk, DiffParser, RangeApplier, parse_diff, render_preview
from .command import SmartPasteCommand, PasteResult, Outcome, CommandRegistry
from .host import Choice
from .errors import SmartPasteError, ClipboardError, OverlappingHunksError

__all__ = [
    "Position", "Range", "TextEdit", "TextDocument", "FileDocument",
    "DiffHunk", "DiffParser", "RangeApplier", "parse_diff", "render_preview",
    "SmartPasteCommand", "PasteResult", "Outcome", "CommandRegistry",
    "Choice",
    "SmartPasteError", "ClipboardError", "OverlappingHunksError",
]
