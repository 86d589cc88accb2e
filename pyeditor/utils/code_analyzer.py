"""Utilities for checking editor scripts against the micro:bit MicroPython API.

Imports are detected with a line based regular expression rather than the
``ast`` module: scripts in the editor are frequently incomplete or contain
syntax errors while being typed, and the checks must still give an answer.
Only single line ``import`` statements are understood. Imports spread over
several lines, for example::

    from microbit import (display,
                          Image)

are skipped without raising. Statements must start at the beginning of the
line, so indented imports (a V2-only module guarded by ``try:``, imports
inside functions) are not part of the record.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pyeditor.core.api_catalog import EXTRA_ONLY_NAMES
from pyeditor.core.boards import BoardCapability, get_board_capability

logger = logging.getLogger(__name__)

EXCLUDE_DIRS = {
    "venv",
    ".venv",
    "build",
    "dist",
    "__pycache__",
    ".git",
    ".hg",
}

# Key used by the browser editor's nested-dict format to flag a direct import.
# Python names cannot contain "-", so it never clashes with a module name.
MODULE_IMPORT_MARKER = "module-import"

IMPORT_RE = re.compile(
    r"^(?:from[ \t]+(?P<module>\S+)[ \t]+)?import[ \t]+(?P<names>.*)$",
    re.MULTILINE,
)
ALIAS_RE = re.compile(r"\s+as\s+")


@dataclass(frozen=True)
class ImportNode:
    """One name in an import record.

    ``imported`` is True when the name itself is bound by an import
    statement, False when it only appears as a parent package of something
    that was imported (``microbit`` in ``from microbit import display``).
    """
    imported: bool = False
    children: Mapping[str, "ImportNode"] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def top_level_modules(self) -> List[str]:
        return list(self.children)

    @property
    def is_empty(self) -> bool:
        return not self.children

    def get(self, path: Union[str, Sequence[str]]) -> Optional["ImportNode"]:
        """Return the node at a dotted ``path``, or None if it was never seen."""
        parts = path.split(".") if isinstance(path, str) else path
        node: Optional[ImportNode] = self
        for part in parts:
            node = node.children.get(part)
            if node is None:
                return None
        return node

    def is_imported(self, path: Union[str, Sequence[str]]) -> bool:
        node = self.get(path)
        return node is not None and node.imported

    def iter_paths(self, prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[str, ...]]:
        """Yield the path of every node below this one, depth first."""
        for name, child in self.children.items():
            path = prefix + (name,)
            yield path
            yield from child.iter_paths(path)

    def to_dict(self) -> Dict[str, Any]:
        """Nested dict form, with ``"module-import": None`` on imported names."""
        data: Dict[str, Any] = {}
        for name, child in self.children.items():
            child_data = child.to_dict()
            if child.imported:
                child_data[MODULE_IMPORT_MARKER] = None
            data[name] = child_data
        return data


class _NodeBuilder:
    """Mutable counterpart of :class:`ImportNode` used while scanning."""

    __slots__ = ("imported", "children")

    def __init__(self) -> None:
        self.imported = False
        self.children: Dict[str, _NodeBuilder] = {}

    def child(self, name: str) -> "_NodeBuilder":
        return self.children.setdefault(name, _NodeBuilder())

    def freeze(self) -> ImportNode:
        return ImportNode(
            imported=self.imported,
            children=MappingProxyType({name: node.freeze() for name, node in self.children.items()}),
        )


def _strip_alias(name: str) -> str:
    return ALIAS_RE.split(name.strip(), maxsplit=1)[0].strip()


def _split_path(dotted: str) -> Optional[List[str]]:
    """Split a dotted name, dropping empty segments.

    Returns None when a segment is not a valid name, which happens for
    constructs this scanner does not support such as ``(display,``.
    """
    segments = [segment.strip() for segment in dotted.split(".")]
    segments = [segment for segment in segments if segment]
    if not all(segment.isidentifier() for segment in segments):
        return None
    return segments


def detect_imports(source: str) -> ImportNode:
    """Detect the names imported by ``source``.

    ``import a.b.c`` marks ``a``, ``a.b`` and ``a.b.c`` as imported, since
    every level of the dotted path is usable afterwards. ``from a.b import c``
    only marks ``c``, nested below the unmarked ``a`` and ``b``. Aliases
    introduced with ``as`` are ignored, the record is keyed on the original
    names.

    Parameters
    ----------
    source:
        Python source code, possibly incomplete.

    Returns
    -------
    ImportNode
        Read-only root of the import record. It has no children when no
        import statement was found.
    """
    root = _NodeBuilder()

    for match in IMPORT_RE.finditer(source):
        module = match.group("module")
        names = match.group("names").split("#", 1)[0]

        if module is None:
            for single_import in names.split(","):
                segments = _split_path(_strip_alias(single_import))
                if not segments:
                    continue
                node = root
                for segment in segments:
                    node = node.child(segment)
                    node.imported = True
        else:
            segments = _split_path(module)
            if segments is None:
                continue
            parent = root
            for segment in segments:
                parent = parent.child(segment)
            for single_import in names.split(","):
                name = _strip_alias(single_import)
                if name != "*" and not name.isidentifier():
                    continue
                parent.child(name).imported = True

    return root.freeze()


def find_incompatible_imports(board_id: str, source: str) -> List[str]:
    """Dotted names imported by ``source`` that ``board_id`` does not provide.

    Raises
    ------
    UnrecognizedBoardError
        If ``board_id`` is not a known board.
    """
    if get_board_capability(board_id) is BoardCapability.FULL:
        return []

    imports = detect_imports(source)
    return sorted({
        dotted for dotted in (".".join(path) for path in imports.iter_paths())
        if dotted in EXTRA_ONLY_NAMES
    })


def is_api_used_compatible(board_id: str, source: str) -> bool:
    """Return True when ``source`` only imports API available on ``board_id``.

    Boards with the full API accept everything. On the other boards the
    script is rejected as soon as it imports a name that only exists in the
    extra modules, such as ``microbit.microphone``.
    """
    unavailable = find_incompatible_imports(board_id, source)
    if unavailable:
        logger.debug(f"Board {board_id} does not support: {', '.join(unavailable)}")
        return False
    return True


def analyze_project(path: Path, board_id: str) -> List[str]:
    """Check every Python file under ``path`` against the API of ``board_id``.

    Parameters
    ----------
    path:
        Root directory of the scripts to analyze.
    board_id:
        Target board. Validated before any file is read.

    Returns
    -------
    List[str]
        A warning per file that imports API missing on the board.
    """
    get_board_capability(board_id)

    results: List[str] = []
    for file_path in sorted(Path(path).rglob("*.py")):
        if any(part in EXCLUDE_DIRS for part in file_path.parts):
            continue
        try:
            text = file_path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as exc:
            logger.warning(f"Skipping {file_path}: {exc}")
            continue

        unavailable = find_incompatible_imports(board_id, text)
        if unavailable:
            results.append(
                f"{file_path}: imports {', '.join(unavailable)} not available on board {board_id}"
            )
    return results


__all__ = [
    "ImportNode",
    "MODULE_IMPORT_MARKER",
    "detect_imports",
    "find_incompatible_imports",
    "is_api_used_compatible",
    "analyze_project",
]
