"""
Host collaborators — the clipboard, the active editor, the confirmation
surface and the notification sink that the Smart Paste command talks to.

Each is an abstract interface so the command can run against an editor
integration, the terminal implementations below, or in-memory fakes.
"""

from __future__ import annotations

import subprocess
import sys
from abc import ABC, abstractmethod
from enum import Enum

from .cli_display import log
from .document import FileDocument, TextDocument
from .editing.diff_parser import DiffHunk
from .editing.preview import render_preview
from .errors import ClipboardError


class Choice(Enum):
    """What the human did with the confirmation prompt."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    DISMISSED = "dismissed"


class Clipboard(ABC):

    @abstractmethod
    def read_text(self) -> str:
        """Return the clipboard contents as plain text."""


class EditorHost(ABC):

    @abstractmethod
    def active_document(self) -> TextDocument | None:
        """Return the document being edited, or None if there is none."""


class ConfirmationSurface(ABC):

    def render_detail(self, hunks: list[DiffHunk],
                      markers: dict[str, str] | None = None) -> str:
        """Format the preview for this surface (plain text by default)."""
        return render_preview(hunks, markers)

    @abstractmethod
    def confirm(self, message: str, detail: str,
                accept_label: str, reject_label: str) -> Choice:
        """Ask the human to accept or reject; may block until they answer."""


class Notifier(ABC):

    @abstractmethod
    def info(self, message: str) -> None: ...

    @abstractmethod
    def error(self, message: str) -> None: ...


# ══════════════════════════════════════════════════════════════════
#  Terminal implementations
# ══════════════════════════════════════════════════════════════════

# Tried in order; the first one that runs wins
_CLIPBOARD_COMMANDS = [
    ["pbpaste"],                                   # macOS
    ["xclip", "-selection", "clipboard", "-o"],    # Linux (X11)
    ["xsel", "--clipboard", "--output"],           # Linux alternative
    ["wl-paste", "--no-newline"],                  # Linux (Wayland)
]


class SystemClipboard(Clipboard):
    """Reads the system clipboard through the platform's paste utility."""

    def __init__(self, timeout: float = 5.0, commands: list[list[str]] | None = None):
        self.timeout = timeout
        self._commands = commands or _CLIPBOARD_COMMANDS

    def read_text(self) -> str:
        for command in self._commands:
            try:
                result = subprocess.run(
                    command,
                    capture_output=True, text=True, timeout=self.timeout,
                )
            except FileNotFoundError:
                continue
            except subprocess.TimeoutExpired:
                log.warning(f"[Clipboard] {command[0]} timed out after {self.timeout}s")
                continue
            if result.returncode == 0:
                log.debug(f"[Clipboard] Read {len(result.stdout)} chars via {command[0]}")
                return result.stdout
            log.debug(f"[Clipboard] {command[0]} exited with {result.returncode}")

        raise ClipboardError(
            "Could not read clipboard. Install xclip, xsel or wl-clipboard "
            "(Linux) or use macOS."
        )


class StaticClipboard(Clipboard):
    """A clipboard with fixed contents (diff read from a file or stdin)."""

    def __init__(self, text: str):
        self._text = text

    def read_text(self) -> str:
        return self._text


class FileEditor(EditorHost):
    """Treats a file on disk as the active document."""

    def __init__(self, path: str | None, encoding: str = "utf-8"):
        self.path = path
        self.encoding = encoding

    def active_document(self) -> TextDocument | None:
        if not self.path:
            return None
        return FileDocument.open(self.path, encoding=self.encoding)


class ConsoleNotifier(Notifier):
    """Prints the command's status notifications to the terminal."""

    C_GREEN = "\033[32m"
    C_RED = "\033[31m"
    C_RESET = "\033[0m"

    ICONS = {
        "info": "✔",
        "error": "✘",
    }

    def __init__(self, stream=None, color: bool | None = None):
        self._stream = stream or sys.stdout
        if color is None:
            color = hasattr(self._stream, "isatty") and self._stream.isatty()
        self._color = color
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        log.info(f"[Notify] {message}")
        self._emit("info", message, self.C_GREEN)

    def error(self, message: str) -> None:
        log.error(f"[Notify] {message}")
        self._emit("error", message, self.C_RED)

    def _emit(self, level: str, message: str, color: str) -> None:
        self.messages.append((level, message))
        line = f"  {self.ICONS[level]} {message}"
        if self._color:
            line = f"{color}{line}{self.C_RESET}"
        print(line, file=self._stream)


class AutoConfirmation(ConfirmationSurface):
    """Non-interactive mode: every prompt is accepted."""

    def confirm(self, message: str, detail: str,
                accept_label: str, reject_label: str) -> Choice:
        log.info(f"[auto] {message}\n{detail}")
        return Choice.ACCEPTED
