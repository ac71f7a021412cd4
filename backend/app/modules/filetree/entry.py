"""
Entry File Resolution
Finds the App component that drives the live preview
"""

from dataclasses import dataclass
from typing import Mapping

from app.core.exceptions import NoEntryFileFoundError


# Checked in this order before falling back to a scan of every path
ENTRY_CANDIDATES = (
    "src/App.jsx",
    "src/App.js",
    "project-root/src/App.jsx",
    "project-root/src/App.js",
)

_FALLBACK_MARKERS = ("App.jsx", "App.js")


@dataclass(frozen=True)
class EntryFile:
    path: str
    content: str


def resolve_entry_file(flat_map: Mapping[str, str]) -> EntryFile:
    """
    Pick the preview entry file from a flat path -> content map.

    1. The first of ENTRY_CANDIDATES present with non-empty content.
    2. Otherwise the first path (in map order) containing "App.jsx" or
       "App.js" with non-empty content.

    Raises:
        NoEntryFileFoundError: neither step matched
    """
    for candidate in ENTRY_CANDIDATES:
        content = flat_map.get(candidate)
        if content:
            return EntryFile(path=candidate, content=content)

    for path, content in flat_map.items():
        if content and any(marker in path for marker in _FALLBACK_MARKERS):
            return EntryFile(path=path, content=content)

    raise NoEntryFileFoundError(list(flat_map.keys()))
