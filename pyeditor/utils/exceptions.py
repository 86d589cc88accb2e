"""Error types raised by the editor support code."""
from __future__ import annotations


class EditorSupportError(Exception):
    """Base class for all pyeditor errors."""


class UnrecognizedBoardError(EditorSupportError, ValueError):
    """Raised when a board ID is not one of the known micro:bit IDs."""

    def __init__(self, board_id: str):
        self.board_id = board_id
        super().__init__(f"Could not recognise the Board ID {board_id!r}")


class ConfigError(EditorSupportError):
    """Raised when an editor configuration file cannot be used."""
