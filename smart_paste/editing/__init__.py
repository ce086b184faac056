"""Diff parsing, preview rendering and range application."""

from .diff_parser import DiffParser, DiffHunk, parse_diff, parse_header, line_count_mismatches
from .preview import render_preview, render_rich_preview, render_colored_preview, line_kind
from .range_applier import RangeApplier, build_replacement, OVERLAP_REJECT, OVERLAP_ALLOW

__all__ = [
    "DiffParser", "DiffHunk", "parse_diff", "parse_header", "line_count_mismatches",
    "render_preview", "render_rich_preview", "render_colored_preview", "line_kind",
    "RangeApplier", "build_replacement", "OVERLAP_REJECT", "OVERLAP_ALLOW",
]
