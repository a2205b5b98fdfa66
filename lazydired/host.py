"""Contracts for the host collaborators the core calls into.

The terminal runtime implements both protocols; tests use small fakes.
Prompts return ``None`` on cancel/dismiss so callers treat it as a no-op.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .diagnostics import AggregatedDiagnostic
    from .listing import Listing
    from .navigation import Selection


class Prompts(Protocol):
    def input_box(self, title: str, placeholder: str = "", value: str | None = None) -> str | None:
        """Ask for one line of text; ``None`` when cancelled."""

    def confirm(self, message: str, options: Sequence[str]) -> str | None:
        """Return the chosen option label, or ``None`` when dismissed."""

    def pick(self, title: str, items: Sequence[tuple[str, str]]) -> str | None:
        """Pick one ``(key, label)`` item and return its key, or ``None``."""

    def show_error(self, message: str) -> None: ...

    def show_info(self, message: str) -> None: ...


class EditorSurface(Protocol):
    def show_listing(self, listing: Listing) -> None:
        """Bind the directory view to ``listing`` and make it active."""

    def active_directory(self) -> str | None:
        """Directory of the active directory view, if one is active."""

    def active_file(self) -> str | None:
        """Path of the active text document, if any."""

    def selections(self) -> tuple[Selection, ...]: ...

    def set_selections(self, selections: Sequence[Selection]) -> None: ...

    def open_file(self, path: str) -> None:
        """Open ``path`` as a text document."""

    def set_annotations(self, annotations: Sequence[AggregatedDiagnostic]) -> None: ...

    def set_decorations(self, badges: Mapping[int, str]) -> None:
        """Gutter badges keyed by line index (git status letters)."""

    def close_view(self) -> None: ...


class KeyValueStore(Protocol):
    def get(self, key: str, default: object = None) -> object: ...

    def set(self, key: str, value: object) -> None: ...


__all__ = ["Prompts", "EditorSurface", "KeyValueStore"]
