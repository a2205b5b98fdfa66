"""Navigation state: current directory, previous path, and cursor memory.

This module has no terminal concerns. It owns the session-wide navigation
tables and drives the editor surface through its narrow protocol.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from . import pathutil
from .host import EditorSurface
from .listing import Listing, ListingModel, is_parent_sentinel, line_to_path

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Line-based selection; ``anchor_line == active_line`` is a plain cursor."""

    anchor_line: int
    active_line: int

    @classmethod
    def caret(cls, line: int) -> Selection:
        return cls(anchor_line=line, active_line=line)

    @property
    def start(self) -> int:
        return min(self.anchor_line, self.active_line)

    @property
    def end(self) -> int:
        return max(self.anchor_line, self.active_line)

    def lines(self) -> range:
        return range(self.start, self.end + 1)

    def clamped(self, line_count: int) -> Selection:
        """Return a variant whose lines fall inside ``[0, line_count)``."""
        last = max(0, line_count - 1)
        return Selection(
            anchor_line=max(0, min(self.anchor_line, last)),
            active_line=max(0, min(self.active_line, last)),
        )


class SelectionMemory:
    """Remembered selections per directory path.

    Entries are never evicted; the table lives as long as the session.
    """

    def __init__(self) -> None:
        self._selections: dict[str, tuple[Selection, ...]] = {}

    def save(self, directory: str, selections: Sequence[Selection]) -> None:
        if not selections:
            return
        self._selections[directory] = tuple(selections)

    def lookup(self, directory: str) -> tuple[Selection, ...] | None:
        return self._selections.get(directory)

    def __len__(self) -> int:
        return len(self._selections)

    def __contains__(self, directory: object) -> bool:
        return directory in self._selections


def find_line_for_path(listing: Listing, path: str) -> int | None:
    """Return the first line resolving to ``path`` (with or without trailing slash)."""
    wanted = pathutil.strip_trailing_slash(path)
    for index, line in enumerate(listing.lines):
        if is_parent_sentinel(line):
            continue
        resolved = line_to_path(listing.directory, line)
        if resolved == wanted or resolved + pathutil.SEP == path:
            return index
    return None


def selected_lines(listing: Listing, selections: Sequence[Selection]) -> list[str]:
    """Return listing lines covered by ``selections`` in document order."""
    indices: set[int] = set()
    for selection in selections:
        indices.update(selection.clamped(len(listing)).lines())
    return [listing.lines[index] for index in sorted(indices) if index < len(listing)]


class NavigationState:
    """Tracks the displayed directory and restores cursors across navigations."""

    def __init__(
        self,
        listing_model: ListingModel,
        surface: EditorSurface,
        *,
        project_root_for: Callable[[str], str | None] | None = None,
        home_dir: Callable[[], str] = lambda: os.path.expanduser("~"),
    ) -> None:
        self.listing_model = listing_model
        self.surface = surface
        self.memory = SelectionMemory()
        self.current_dir: str | None = None
        self.previous_path: str | None = None
        self.listing: Listing | None = None
        self._project_root_for = project_root_for
        self._home_dir = home_dir

    def save_selections(self) -> None:
        """Remember the outgoing directory view's selections."""
        directory = self.surface.active_directory()
        if directory is None:
            return
        self.memory.save(directory, self.surface.selections())

    def _active_path(self) -> str | None:
        directory = self.surface.active_directory()
        if directory is not None:
            return directory
        return self.surface.active_file()

    def open(self, path: str) -> Listing:
        """Render ``path`` and make it the displayed directory.

        Raises ``NotFoundError`` without changing state when ``path`` cannot be
        rendered. Remembered selections are restored first, then the cursor is
        moved onto the previously active path when it is listed.
        """
        directory = pathutil.normalize(path)
        listing = self.listing_model.render(directory)

        self.save_selections()
        self.previous_path = self._active_path()
        self.current_dir = directory
        self.listing = listing
        _LOGGER.debug("open %s (previous=%s)", directory, self.previous_path)

        self.surface.show_listing(listing)
        self.restore_selections()
        self.restore_cursor()
        return listing

    def restore_cursor(self) -> int | None:
        if self.listing is None or not self.previous_path:
            return None
        index = find_line_for_path(self.listing, self.previous_path)
        if index is not None:
            self.surface.set_selections([Selection.caret(index)])
        return index

    def restore_selections(self) -> bool:
        if self.listing is None or self.current_dir is None:
            return False
        remembered = self.memory.lookup(self.current_dir)
        if not remembered:
            return False
        self.surface.set_selections([selection.clamped(len(self.listing)) for selection in remembered])
        return True

    def refresh(self) -> Listing | None:
        """Re-render the current directory keeping selections in range."""
        if self.current_dir is None:
            return None
        selections = self.surface.selections()
        listing = self.listing_model.render(self.current_dir)
        self.listing = listing
        self.surface.show_listing(listing)
        if selections:
            self.surface.set_selections([selection.clamped(len(listing)) for selection in selections])
        return listing

    def open_parent(self) -> Listing | None:
        if self.current_dir is None:
            return None
        return self.open(pathutil.dirname(self.current_dir))

    def home_directory(self) -> str:
        """Project root of the active file (or current directory), else home."""
        anchor = self.surface.active_file() or self.current_dir
        if anchor and self._project_root_for is not None:
            root = self._project_root_for(anchor)
            if root:
                return root
        return self._home_dir()

    def open_home(self) -> Listing:
        return self.open(self.home_directory())


__all__ = [
    "Selection",
    "SelectionMemory",
    "NavigationState",
    "find_line_for_path",
    "selected_lines",
]
