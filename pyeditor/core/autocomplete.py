"""Flat autocomplete word lists generated from the API catalogs."""
from __future__ import annotations

import logging
from typing import List

from pyeditor.core.api_catalog import (
    BASE_API,
    FULL_API,
    ApiNode,
    Bare,
    Members,
    Submodules,
)
from pyeditor.core.boards import is_full_capability

logger = logging.getLogger(__name__)


def flatten_api(catalog: ApiNode) -> List[str]:
    """Expand a catalog into the dotted words the autocomplete widget expects.

    Every top-level module is emitted on its own, followed by its members
    (``math.sqrt``) or its sub-modules (``microbit.display``). Members of a
    sub-module are emitted twice, fully qualified (``microbit.Image.HAPPY``)
    and without the top-level prefix (``Image.HAPPY``) for code written after
    ``from microbit import *``. Nothing below the second level is unrolled.
    """
    if not isinstance(catalog, Submodules):
        raise TypeError(f"A catalog must be a Submodules node, got {catalog!r}")

    words: List[str] = []
    for module, node in catalog.children.items():
        words.append(module)
        if isinstance(node, Members):
            words.extend(f"{module}.{member}" for member in node.names)
        elif isinstance(node, Submodules):
            for sub, sub_node in node.children.items():
                words.append(f"{module}.{sub}")
                if isinstance(sub_node, Members):
                    for member in sub_node.names:
                        words.append(f"{module}.{sub}.{member}")
                        words.append(f"{sub}.{member}")
        elif not isinstance(node, Bare):
            raise TypeError(f"Unsupported catalog node for {module!r}: {node!r}")
    return words


def get_base_api() -> List[str]:
    """Autocomplete words for the API every board supports."""
    return flatten_api(BASE_API)


def get_full_api() -> List[str]:
    """Autocomplete words for boards with the extra modules."""
    return flatten_api(FULL_API)


def get_compatible_api(board_id: str) -> List[str]:
    """Autocomplete words matching the API of ``board_id``.

    Unknown IDs get the base API, this function does not validate them.
    """
    if is_full_capability(board_id):
        words = get_full_api()
    else:
        words = get_base_api()
    logger.debug(f"Generated {len(words)} autocomplete words for board {board_id}")
    return words


__all__ = ["flatten_api", "get_base_api", "get_full_api", "get_compatible_api"]
