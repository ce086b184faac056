"""
Preview renderer — human-readable restatement of parsed hunks, shown to
the user before anything is written.

The output is for display only and is never parsed again.
"""

from __future__ import annotations

from rich.markup import escape

from .diff_parser import ADDED, REMOVED, DiffHunk

DEFAULT_MARKERS = {
    "add": "✚",
    "remove": "✖",
    "context": "○",
}

# Rich styles used by the Textual dialog
_RICH_STYLES = {
    "add": "green",
    "remove": "red",
    "context": "dim",
}

# ANSI colours used by the console prompt
_ANSI_COLORS = {
    "add": "\033[32m",
    "remove": "\033[31m",
    "context": "\033[2m",
}
_ANSI_HEADER = "\033[36m"
_ANSI_RESET = "\033[0m"


def line_kind(line: str) -> str:
    """Classify a body line as ``add``, ``remove`` or ``context``."""
    if line.startswith(ADDED):
        return "add"
    if line.startswith(REMOVED):
        return "remove"
    return "context"


def render_preview(hunks: list[DiffHunk], markers: dict[str, str] | None = None) -> str:
    """Render hunks as plain text with one marker per body line.

    Each hunk is a restated header followed by its annotated body lines;
    hunks are separated by a blank line.
    """
    marks = {**DEFAULT_MARKERS, **(markers or {})}
    parts: list[str] = []
    for hunk in hunks:
        parts.append(hunk.header + "\n")
        for line in hunk.lines:
            parts.append(f"{marks[line_kind(line)]} {line}\n")
        parts.append("\n")
    return "".join(parts)


def render_rich_preview(hunks: list[DiffHunk], markers: dict[str, str] | None = None) -> str:
    """Same content as :func:`render_preview`, as Rich markup."""
    marks = {**DEFAULT_MARKERS, **(markers or {})}
    markup_lines: list[str] = []
    for hunk in hunks:
        markup_lines.append(f"[cyan]{escape(hunk.header)}[/cyan]")
        for line in hunk.lines:
            kind = line_kind(line)
            style = _RICH_STYLES[kind]
            markup_lines.append(
                f"[{style}]{escape(marks[kind])} {escape(line)}[/{style}]"
            )
        markup_lines.append("")
    return "\n".join(markup_lines)


def render_colored_preview(hunks: list[DiffHunk], markers: dict[str, str] | None = None) -> str:
    """Same content as :func:`render_preview`, with ANSI colours."""
    marks = {**DEFAULT_MARKERS, **(markers or {})}
    colored: list[str] = []
    for hunk in hunks:
        colored.append(f"{_ANSI_HEADER}{hunk.header}{_ANSI_RESET}")
        for line in hunk.lines:
            kind = line_kind(line)
            colored.append(f"{_ANSI_COLORS[kind]}{marks[kind]} {line}{_ANSI_RESET}")
        colored.append("")
    return "\n".join(colored)
