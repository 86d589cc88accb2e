"""micro:bit board identifiers and the MicroPython API level they support."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from pyeditor.utils.exceptions import UnrecognizedBoardError


class BoardCapability(Enum):
    """MicroPython API level available on a board."""
    BASE = "base"
    FULL = "full"


# V1 boards only run the base API, V2 boards add the extra modules
BASE_BOARD_IDS: Tuple[str, ...] = ("9900", "9901")
FULL_BOARD_IDS: Tuple[str, ...] = ("9903", "9904")

BOARD_NAMES: Dict[str, str] = {
    "9900": "micro:bit V1.3",
    "9901": "micro:bit V1.5",
    "9903": "micro:bit V2.0",
    "9904": "micro:bit V2.2",
}


def is_full_capability(board_id: str) -> bool:
    """Return True for boards with the full API. Does not validate the ID."""
    return str(board_id) in FULL_BOARD_IDS


def get_board_capability(board_id: str) -> BoardCapability:
    """Return the capability level of ``board_id``.

    Raises
    ------
    UnrecognizedBoardError
        If the ID is not a known micro:bit board.
    """
    board_id = str(board_id)
    if board_id in FULL_BOARD_IDS:
        return BoardCapability.FULL
    if board_id in BASE_BOARD_IDS:
        return BoardCapability.BASE
    raise UnrecognizedBoardError(board_id)


def list_boards() -> Dict[str, Dict[str, str]]:
    """Known boards with their display name and capability."""
    return {
        board_id: {
            'name': name,
            'capability': get_board_capability(board_id).value,
        }
        for board_id, name in BOARD_NAMES.items()
    }


__all__ = [
    "BoardCapability",
    "BASE_BOARD_IDS",
    "FULL_BOARD_IDS",
    "is_full_capability",
    "get_board_capability",
    "list_boards",
]
