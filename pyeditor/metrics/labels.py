"""Analytics labels for editor actions.

Raw values (line counts, file sizes, flash times) are never reported, they
are bucketed into coarse ranges first.
"""
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

Range = Tuple[int, int]

VIEWPORT_RANGES: List[Range] = [(0, 480), (481, 890), (891, 1024), (1025, 1280), (1281, 10000)]
LINES_RANGES: List[Range] = [
    (0, 20), (21, 50), (51, 100), (101, 200), (201, 500), (501, 1000), (1001, 1000000),
]
FILES_RANGES: List[Range] = [(11, 15), (16, 20), (21, 25), (26, 1000)]
FS_SIZE_RANGES: List[Range] = [
    (0, 5), (6, 10), (11, 15), (16, 20), (21, 25), (26, 30), (30, 1000),
]
# Upper bounds in milliseconds, the first bucket excludes its bound
FLASH_TIME_BUCKETS: List[Tuple[int, str]] = [
    (4000, "2-4"),
    (6000, "4-6"),
    (10000, "6-10"),
    (20000, "10-20"),
    (30000, "20-30"),
    (60000, "30-60"),
    (120000, "60-120"),
]

LOADABLE_EXTENSIONS = ("py", "hex")
LOAD_SOURCES = ("drop-editor", "drop-load", "file-upload")

DEFAULT_LABEL = "default"
UNKNOWN_ACTION = "unknown"
UNKNOWN_FLASH_TIME = "unknown"

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")

# Element id fragment -> reported action, first match wins
_ACTION_ALIASES = [
    ("_save", "file-save"),
    ("_remove", "file-remove"),
    ("flashing-overlay-download", "webusb/error-modal/download-hex"),
    ("flashing-overlay-troubleshoot", "webusb/error-modal/troubleshoot"),
]


def bucket_label(value: float, ranges: Sequence[Range]) -> str:
    """Return ``"lo-hi"`` for the first range containing ``value``, or ``""``."""
    for low, high in ranges:
        if low <= value <= high:
            return f"{low}-{high}"
    return ""


def viewport_label(width: int) -> str:
    return bucket_label(width, VIEWPORT_RANGES)


def count_lines(code: str) -> int:
    return len(_NEWLINE_RE.split(code))


def lines_label(code: str, default_script: Optional[str] = None) -> str:
    """Bucketed line count, or ``"default"`` for an unmodified script."""
    if default_script is not None and code == default_script:
        return DEFAULT_LABEL
    return bucket_label(count_lines(code), LINES_RANGES)


def files_label(count: int) -> str:
    """Exact file count up to 10, bucketed above."""
    if count > 10:
        return bucket_label(count, FILES_RANGES)
    return str(count)


def fs_size_label(bytes_used: int) -> str:
    """Bucketed filesystem usage in whole kilobytes."""
    return bucket_label(bytes_used // 1024, FS_SIZE_RANGES)


def file_extension(filename: str) -> str:
    """Lower-cased extension of ``filename``, ``"none"`` without one."""
    name = filename.lower()
    if "." not in name:
        return "none"
    return name.rsplit(".", 1)[1] or "none"


def load_label(source: str, filename: str) -> str:
    """Label for a file loaded into the editor from ``source``."""
    if source not in LOAD_SOURCES:
        raise ValueError(f"Unknown load source: {source!r}")
    ext = file_extension(filename)
    if ext in LOADABLE_EXTENSIONS:
        return f"{source}-{ext}"
    return f"error-{source}-type-{ext}"


def upload_label(filenames: Sequence[str]) -> str:
    """Label for the Load/Save dialog, which accepts a single file."""
    if len(filenames) != 1:
        return "error-file-upload-multiple"
    return load_label("file-upload", filenames[0])


def flash_time_label(milliseconds: float) -> str:
    if milliseconds < 2000:
        return "0-2"
    for upper, label in FLASH_TIME_BUCKETS:
        if milliseconds <= upper:
            return label
    return "120+"


def webusb_event(event_type: str, message) -> Tuple[str, str]:
    """Map a WebUSB flashing event to an ``(action, label)`` pair."""
    if event_type == "flash-time":
        try:
            milliseconds = float(message)
        except (TypeError, ValueError):
            return "WebUSB-time", UNKNOWN_FLASH_TIME
        return "WebUSB-time", flash_time_label(milliseconds)
    if event_type == "info":
        return "WebUSB-info", str(message)
    if event_type == "error":
        return "WebUSB-error", str(message)
    return "WebUSB-error", f"unknown-event/{event_type}/{message}"


def action_id(element_id: Optional[str]) -> str:
    """Normalise the id of a clicked ``.action`` element."""
    if not element_id:
        return UNKNOWN_ACTION
    action = element_id.replace("command-", "", 1)
    for fragment, alias in _ACTION_ALIASES:
        if fragment in action:
            return alias
    return action
