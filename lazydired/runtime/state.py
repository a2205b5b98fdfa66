"""Mutable view state for the terminal host."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..diagnostics import AggregatedDiagnostic
from ..listing import Listing
from ..navigation import Selection


@dataclass
class ViewState:
    listing: Listing | None = None
    view_active: bool = False
    active_file: str | None = None
    cursor: int = 0
    visual_anchor: int | None = None
    extra_selections: list[Selection] = field(default_factory=list)
    top: int = 0
    annotations: dict[int, AggregatedDiagnostic] = field(default_factory=dict)
    badges: dict[int, str] = field(default_factory=dict)
    status_message: str = ""
    status_is_error: bool = False
    status_message_until: float = 0.0
    prompt_line: str | None = None
    overlay_title: str = ""
    overlay_lines: list[str] | None = None
    overlay_selected: int = 0
    show_help: bool = False
    dirty: bool = True

    @property
    def line_count(self) -> int:
        return len(self.listing) if self.listing is not None else 0

    def clamp_cursor(self) -> None:
        last = max(0, self.line_count - 1)
        self.cursor = max(0, min(self.cursor, last))
        if self.visual_anchor is not None:
            self.visual_anchor = max(0, min(self.visual_anchor, last))

    def selections(self) -> tuple[Selection, ...]:
        anchor = self.visual_anchor if self.visual_anchor is not None else self.cursor
        return (Selection(anchor_line=anchor, active_line=self.cursor), *self.extra_selections)

    def selected_line_indices(self) -> set[int]:
        indices: set[int] = set()
        for selection in self.selections():
            indices.update(selection.lines())
        return indices


__all__ = ["ViewState"]
