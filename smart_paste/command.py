"""
Smart Paste command — reads a diff from the clipboard, previews it, and
applies it to the active document once the user confirms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from .document import TextEdit
from .editing.diff_parser import DiffHunk, DiffParser, line_count_mismatches
from .editing.range_applier import OVERLAP_REJECT, RangeApplier
from .errors import ClipboardError, OverlappingHunksError
from .host import Choice, Clipboard, ConfirmationSurface, EditorHost, Notifier

logger = logging.getLogger(__name__)

SMART_PASTE_COMMAND_ID = "extension.smartPaste"

REVIEW_MESSAGE = "Review the changes below:"
APPLY_LABEL = "Apply Changes"
CANCEL_LABEL = "Cancel"

MSG_NO_EDITOR = "No active editor"
MSG_NO_DIFF = "No valid diff content found in clipboard"
MSG_CANCELLED = "Smart Paste cancelled"
MSG_APPLIED = "Smart Paste applied successfully"
MSG_FAILED = "Failed to apply Smart Paste"


class Outcome(Enum):
    """Terminal state of one Smart Paste invocation."""
    APPLIED = "applied"
    CANCELLED = "cancelled"
    NO_DIFF = "no_diff"
    NO_EDITOR = "no_editor"
    FAILED = "failed"


@dataclass
class PasteResult:
    """What happened during one invocation."""
    outcome: Outcome
    hunks: list[DiffHunk] = field(default_factory=list)
    edits: list[TextEdit] = field(default_factory=list)
    choice: Choice | None = None
    error: str = ""

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.APPLIED


class SmartPasteCommand:
    """The Smart Paste flow, wired to injected host collaborators."""

    def __init__(
        self,
        editor: EditorHost,
        clipboard: Clipboard,
        confirmation: ConfirmationSurface,
        notifier: Notifier,
        overlap_policy: str = OVERLAP_REJECT,
        strict_line_counts: bool = False,
        markers: dict[str, str] | None = None,
    ) -> None:
        self._editor = editor
        self._clipboard = clipboard
        self._confirmation = confirmation
        self._notifier = notifier
        self._parser = DiffParser()
        self._applier = RangeApplier(overlap_policy=overlap_policy)
        self._strict_line_counts = strict_line_counts
        self._markers = markers

    def run(self) -> PasteResult:
        """Execute one invocation and return its outcome.

        Every terminal state is reported through the notifier; nothing is
        raised to the caller.
        """
        document = self._editor.active_document()
        if document is None:
            self._notifier.error(MSG_NO_EDITOR)
            return PasteResult(Outcome.NO_EDITOR)

        try:
            text = self._clipboard.read_text()
        except ClipboardError as exc:
            logger.warning("[SmartPaste] Clipboard unavailable: %s", exc)
            text = ""

        hunks = self._parser.parse(text)
        if not hunks:
            self._notifier.info(MSG_NO_DIFF)
            return PasteResult(Outcome.NO_DIFF)

        mismatches = line_count_mismatches(hunks)
        if mismatches and self._strict_line_counts:
            self._notifier.error(MSG_FAILED)
            return PasteResult(Outcome.FAILED, hunks=hunks,
                               error="; ".join(mismatches))

        # Edits made to the document while the dialog is open make this
        # version stale and the transaction is rejected.
        version = document.version
        detail = self._confirmation.render_detail(hunks, self._markers)
        choice = self._confirmation.confirm(
            REVIEW_MESSAGE, detail, APPLY_LABEL, CANCEL_LABEL,
        )
        if choice is not Choice.ACCEPTED:
            self._notifier.info(MSG_CANCELLED)
            return PasteResult(Outcome.CANCELLED, hunks=hunks, choice=choice)

        # Ranges are computed now and committed as one transaction.
        try:
            edits = self._applier.apply(document, hunks)
        except OverlappingHunksError as exc:
            self._notifier.error(MSG_FAILED)
            return PasteResult(Outcome.FAILED, hunks=hunks, choice=choice,
                               error=str(exc))

        if not document.apply_edits(edits, version=version):
            self._notifier.error(MSG_FAILED)
            return PasteResult(Outcome.FAILED, hunks=hunks, edits=edits,
                               choice=choice,
                               error=f"{document.uri} rejected the edits")

        logger.info(
            "[SmartPaste] Applied %d hunk(s) to %s", len(hunks), document.uri
        )
        self._notifier.info(MSG_APPLIED)
        return PasteResult(Outcome.APPLIED, hunks=hunks, edits=edits,
                           choice=choice)


class CommandRegistry:
    """Maps command identifiers to zero-argument handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], object]] = {}

    def register(self, command_id: str, handler: Callable[[], object]) -> Callable[[], None]:
        """Register *handler*; returns a callable that unregisters it."""
        if command_id in self._handlers:
            raise ValueError(f"Command already registered: {command_id}")
        self._handlers[command_id] = handler
        logger.debug("[Registry] Registered %s", command_id)

        def unregister() -> None:
            if self._handlers.get(command_id) is handler:
                del self._handlers[command_id]
                logger.debug("[Registry] Unregistered %s", command_id)

        return unregister

    def execute(self, command_id: str):
        try:
            handler = self._handlers[command_id]
        except KeyError:
            raise KeyError(f"Unknown command: {command_id}") from None
        return handler()

    def __contains__(self, command_id: str) -> bool:
        return command_id in self._handlers

    def dispose(self) -> None:
        """Unregister every command."""
        self._handlers.clear()


def activate(registry: CommandRegistry, command: SmartPasteCommand) -> Callable[[], None]:
    """Register Smart Paste under :data:`SMART_PASTE_COMMAND_ID`."""
    return registry.register(SMART_PASTE_COMMAND_ID, command.run)
