"""Exceptions raised by Smart Paste components."""

from __future__ import annotations


class SmartPasteError(Exception):
    """Base class for Smart Paste failures."""


class ClipboardError(SmartPasteError):
    """Raised when the system clipboard cannot be read."""


class OverlappingHunksError(SmartPasteError):
    """Raised when two hunks replace overlapping parts of the document."""

    def __init__(self, first, second) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Hunks {first.header} and {second.header} overlap"
        )
