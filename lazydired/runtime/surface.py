"""Editor-surface implementation backed by the terminal view state."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from ..diagnostics import AggregatedDiagnostic
from ..listing import Listing
from ..navigation import Selection
from .state import ViewState


class TerminalEditorSurface:
    """Binds listings, selections, and annotations onto ``ViewState``.

    Opening a file delegates to ``open_file_handler`` (normally ``$EDITOR``),
    which blocks until the editor exits; the listing is visible again afterwards.
    Before the first listing is shown, ``state.active_file`` is the file the
    browser was started on.
    """

    def __init__(self, state: ViewState, open_file_handler: Callable[[str], None]) -> None:
        self.state = state
        self._open_file_handler = open_file_handler

    def show_listing(self, listing: Listing) -> None:
        state = self.state
        if state.listing is None or state.listing.directory != listing.directory:
            state.cursor = 0
            state.top = 0
            state.visual_anchor = None
            state.extra_selections = []
            state.annotations = {}
            state.badges = {}
        state.listing = listing
        state.view_active = True
        state.active_file = None
        state.clamp_cursor()
        state.dirty = True

    def active_directory(self) -> str | None:
        if not self.state.view_active or self.state.listing is None:
            return None
        return self.state.listing.directory

    def active_file(self) -> str | None:
        return self.state.active_file

    def selections(self) -> tuple[Selection, ...]:
        if self.state.listing is None:
            return ()
        return self.state.selections()

    def set_selections(self, selections: Sequence[Selection]) -> None:
        if not selections:
            return
        primary, *rest = selections
        state = self.state
        state.cursor = primary.active_line
        state.visual_anchor = primary.anchor_line if primary.anchor_line != primary.active_line else None
        state.extra_selections = list(rest)
        state.clamp_cursor()
        state.dirty = True

    def open_file(self, path: str) -> None:
        self._open_file_handler(path)
        self.state.active_file = path
        self.state.dirty = True

    def set_annotations(self, annotations: Sequence[AggregatedDiagnostic]) -> None:
        self.state.annotations = {annotation.line: annotation for annotation in annotations}
        self.state.dirty = True

    def set_decorations(self, badges: Mapping[int, str]) -> None:
        self.state.badges = dict(badges)
        self.state.dirty = True

    def close_view(self) -> None:
        self.state.view_active = False
        self.state.dirty = True


__all__ = ["TerminalEditorSurface"]
