"""Directory rendering and line-to-path resolution."""

from __future__ import annotations

import logging

from .. import pathutil
from ..errors import NotFoundError
from .fs import Filesystem
from .types import DirectoryEntry, Listing

_LOGGER = logging.getLogger(__name__)


def is_parent_sentinel(line: str) -> bool:
    return line == pathutil.PARENT_SENTINEL


def line_to_path(directory: str, line: str) -> str:
    """Resolve a listing line against the directory it was rendered from."""
    if not line:
        raise ValueError("line text must be non-empty")
    return pathutil.join(directory, pathutil.strip_trailing_slash(line))


def line_for(entry: DirectoryEntry) -> str:
    return entry.display_line


def sort_entries(entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
    """Directories first, then files; codepoint order within each kind."""
    return sorted(entries, key=lambda entry: (not entry.is_dir, entry.name))


class ListingModel:
    """Turns a directory into listing lines through a ``Filesystem``."""

    def __init__(self, fs: Filesystem, *, show_hidden: bool = True) -> None:
        self.fs = fs
        self.show_hidden = show_hidden

    def render(self, directory: str) -> Listing:
        """Read, filter, and sort ``directory`` into a ``Listing``.

        Entries that vanish between enumeration and stat are dropped silently.
        Raises ``NotFoundError`` when ``directory`` is missing or not a directory.
        """
        if not self.fs.stat(directory).is_dir:
            raise NotFoundError(directory, "not a directory")

        entries: list[DirectoryEntry] = []
        for name, kind in self.fs.read_dir(directory):
            if not self.show_hidden and name.startswith("."):
                continue
            if not self.fs.stat(pathutil.join(directory, name)).exists:
                _LOGGER.debug("dropping vanished entry %s in %s", name, directory)
                continue
            entries.append(DirectoryEntry(name=name, kind=kind))

        ordered = tuple(sort_entries(entries))
        has_parent = not pathutil.is_root(directory)
        lines = [line_for(entry) for entry in ordered]
        if has_parent:
            lines.insert(0, pathutil.PARENT_SENTINEL)
        return Listing(directory=directory, lines=tuple(lines), entries=ordered, has_parent=has_parent)

    line_to_path = staticmethod(line_to_path)
    is_parent_sentinel = staticmethod(is_parent_sentinel)


__all__ = [
    "ListingModel",
    "is_parent_sentinel",
    "line_to_path",
    "line_for",
    "sort_entries",
]
