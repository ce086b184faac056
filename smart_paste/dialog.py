"""
Confirmation dialogs — show the rendered preview and wait for the user to
apply or cancel.

``TextualConfirmation`` runs a small Textual app; ``ConsoleConfirmation``
is a plain prompt for non-interactive terminals and pipes.
"""

from __future__ import annotations

import sys

from .cli_display import log
from .editing.diff_parser import DiffHunk
from .editing.preview import render_colored_preview, render_preview, render_rich_preview
from .host import Choice, ConfirmationSurface


def build_confirm_app(message: str, detail: str,
                      accept_label: str, reject_label: str):
    """Create the Textual app; ``app.run()`` returns a :class:`Choice` or None."""
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, VerticalScroll
    from textual.widgets import Button, Footer, Static

    class ConfirmApp(App):
        """Modal preview with apply/cancel buttons."""

        CSS = """
        Screen {
            background: $surface;
        }
        #title-bar {
            dock: top;
            height: 3;
            background: #1a1a2e;
            color: #e9c46a;
            text-align: center;
            padding: 1;
            text-style: bold;
        }
        #preview-scroll {
            height: 1fr;
            margin: 1 2;
            border: round #444;
            padding: 1;
        }
        #action-buttons {
            dock: bottom;
            height: 3;
            align: center middle;
            padding: 0 2;
        }
        #action-buttons Button {
            margin: 0 2;
            min-width: 20;
        }
        #summary {
            dock: bottom;
            height: 1;
            text-align: center;
            color: #888;
        }
        """

        BINDINGS = [
            Binding("a", "accept", accept_label, priority=True),
            Binding("c", "reject", reject_label, priority=True),
            Binding("escape", "dismiss_dialog", "Dismiss", priority=True),
        ]

        def compose(self) -> ComposeResult:
            yield Static(f" ━━  {message}  ━━ ", id="title-bar", markup=False)
            with VerticalScroll(id="preview-scroll"):
                yield Static(detail)
            yield Static(
                f"Press [bold]A[/bold] to apply, [bold]C[/bold] to cancel, "
                f"Esc to dismiss",
                id="summary",
            )
            with Horizontal(id="action-buttons"):
                yield Button(accept_label, id="accept-btn", variant="success")
                yield Button(reject_label, id="reject-btn", variant="error")
            yield Footer()

        def on_button_pressed(self, event: Button.Pressed) -> None:
            if event.button.id == "accept-btn":
                self.exit(Choice.ACCEPTED)
            elif event.button.id == "reject-btn":
                self.exit(Choice.REJECTED)

        def action_accept(self) -> None:
            self.exit(Choice.ACCEPTED)

        def action_reject(self) -> None:
            self.exit(Choice.REJECTED)

        def action_dismiss_dialog(self) -> None:
            self.exit(Choice.DISMISSED)

    return ConfirmApp()


class TextualConfirmation(ConfirmationSurface):
    """Full-screen Textual dialog; *detail* is Rich markup."""

    def render_detail(self, hunks: list[DiffHunk],
                      markers: dict[str, str] | None = None) -> str:
        return render_rich_preview(hunks, markers)

    def confirm(self, message: str, detail: str,
                accept_label: str, reject_label: str) -> Choice:
        app = build_confirm_app(message, detail, accept_label, reject_label)
        result = app.run()
        # Quitting the app any other way (ctrl+q) counts as dismissal
        choice = result if isinstance(result, Choice) else Choice.DISMISSED
        log.info(f"[Dialog] User choice: {choice.value}")
        return choice


class ConsoleConfirmation(ConfirmationSurface):
    """Fallback prompt on stdin/stdout."""

    def __init__(self, input_func=None, stream=None, color: bool | None = None):
        self._input = input_func or input
        self._stream = stream or sys.stdout
        if color is None:
            color = hasattr(self._stream, "isatty") and self._stream.isatty()
        self._color = color

    def render_detail(self, hunks: list[DiffHunk],
                      markers: dict[str, str] | None = None) -> str:
        if self._color:
            return render_colored_preview(hunks, markers)
        return render_preview(hunks, markers)

    def confirm(self, message: str, detail: str,
                accept_label: str, reject_label: str) -> Choice:
        out = self._stream
        print("\n" + "=" * 60, file=out)
        print(f"  {message}", file=out)
        print("=" * 60, file=out)
        print(detail, file=out)
        print("=" * 60, file=out)
        print(f"  [A] {accept_label}  |  [C] {reject_label}", file=out)
        print(file=out)

        while True:
            try:
                answer = self._input("  Your choice: ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                choice = Choice.DISMISSED
                break
            if answer in ("a", accept_label.lower()):
                choice = Choice.ACCEPTED
                break
            if answer in ("c", reject_label.lower()):
                choice = Choice.REJECTED
                break
            print("  Invalid choice. Use A or C.", file=out)

        log.info(f"[Dialog] User choice: {choice.value}")
        return choice
