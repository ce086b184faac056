"""
CLI entry point — apply a diff from the clipboard (or a file) to a file.
"""

import argparse
import sys

from .cli_display import setup_logger, log
from .command import (
    SMART_PASTE_COMMAND_ID, CommandRegistry, Outcome, SmartPasteCommand, activate,
)
from .config import Config
from .dialog import ConsoleConfirmation, TextualConfirmation
from .editing.range_applier import OVERLAP_POLICIES
from .host import (
    AutoConfirmation, ConsoleNotifier, FileEditor, StaticClipboard, SystemClipboard,
)

EXIT_CODES = {
    Outcome.APPLIED: 0,
    Outcome.FAILED: 1,
    Outcome.NO_EDITOR: 2,
    Outcome.NO_DIFF: 2,
    Outcome.CANCELLED: 3,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartpaste",
        description="Smart Paste — apply a unified diff from the clipboard to a file",
    )
    parser.add_argument("target", nargs="?", default=None,
                        help="The file to patch")
    parser.add_argument("--from", dest="diff_source", default=None,
                        metavar="FILE",
                        help="Read the diff from FILE ('-' for stdin) "
                             "instead of the clipboard")
    parser.add_argument("--yes", action="store_true",
                        help="Apply without asking for confirmation")
    parser.add_argument("--no-tui", action="store_true",
                        help="Use the plain console prompt instead of the TUI")
    parser.add_argument("--overlap", choices=OVERLAP_POLICIES, default=None,
                        help="How to treat overlapping hunks (default: from config)")
    parser.add_argument("--strict", action="store_true",
                        help="Refuse diffs whose hunk bodies disagree with "
                             "their header line counts")
    parser.add_argument("--config", default=None,
                        help="Path to .smartpaste.yaml config file")
    return parser


def _read_diff_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    with open(source, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # ── 0. Load config ──
    cfg = Config.load(args.config)
    setup_logger(cfg.LOG_DIR)

    overlap_policy = args.overlap or cfg.OVERLAP_POLICY
    strict = args.strict or cfg.STRICT_LINE_COUNTS

    # ── 1. Collaborators ──
    if args.diff_source:
        try:
            clipboard = StaticClipboard(_read_diff_source(args.diff_source))
        except OSError as e:
            print(f"smartpaste: cannot read {args.diff_source}: {e}", file=sys.stderr)
            return EXIT_CODES[Outcome.FAILED]
    else:
        clipboard = SystemClipboard(timeout=cfg.CLIPBOARD_TIMEOUT)

    if args.yes:
        confirmation = AutoConfirmation()
    elif cfg.USE_TUI and not args.no_tui and sys.stdin.isatty() and sys.stdout.isatty():
        confirmation = TextualConfirmation()
    else:
        confirmation = ConsoleConfirmation()

    command = SmartPasteCommand(
        editor=FileEditor(args.target),
        clipboard=clipboard,
        confirmation=confirmation,
        notifier=ConsoleNotifier(),
        overlap_policy=overlap_policy,
        strict_line_counts=strict,
        markers=cfg.MARKERS,
    )

    # ── 2. Run ──
    registry = CommandRegistry()
    activate(registry, command)
    try:
        result = registry.execute(SMART_PASTE_COMMAND_ID)
    finally:
        registry.dispose()

    if result.error:
        log.warning(f"[SmartPaste] {result.error}")
    return EXIT_CODES[result.outcome]


if __name__ == "__main__":
    sys.exit(main())
