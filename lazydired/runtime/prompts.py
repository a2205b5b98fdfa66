"""Prompt widgets drawn on the status row and the overlay area.

Each prompt runs a small modal key loop: it updates ``ViewState``, asks the
host to redraw, and consumes keys until the user accepts or dismisses.
Dismissal always returns ``None``.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from .state import ViewState

MESSAGE_SECONDS = 4.0
_DISMISS_KEYS = frozenset({"ESC", "CTRL_C"})


def _delete_word(text: str) -> str:
    stripped = text.rstrip()
    cut = max(stripped.rfind(" "), stripped.rfind("/", 0, len(stripped) - 1))
    return stripped[: cut + 1] if cut >= 0 else ""


class TerminalPrompts:
    """Prompts collaborator for the terminal host."""

    def __init__(
        self,
        state: ViewState,
        read_key: Callable[[], str],
        redraw: Callable[[], None],
        *,
        message_seconds: float = MESSAGE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self._read_key = read_key
        self._redraw = redraw
        self._message_seconds = message_seconds
        self._clock = clock

    def _show_prompt(self, text: str) -> None:
        self.state.prompt_line = text
        self.state.dirty = True
        self._redraw()

    def _clear_prompt(self) -> None:
        self.state.prompt_line = None
        self.state.dirty = True

    def input_box(self, title: str, placeholder: str = "", value: str | None = None) -> str | None:
        buffer = value or ""
        label = f"{title} ({placeholder}): " if placeholder else f"{title}: "
        try:
            while True:
                self._show_prompt(f"{label}{buffer}_")
                key = self._read_key()
                if key in _DISMISS_KEYS:
                    return None
                if key == "ENTER":
                    return buffer
                if key == "BACKSPACE":
                    buffer = buffer[:-1]
                elif key == "CTRL_U":
                    buffer = ""
                elif key == "CTRL_W":
                    buffer = _delete_word(buffer)
                elif len(key) == 1 and key.isprintable():
                    buffer += key
        finally:
            self._clear_prompt()

    def confirm(self, message: str, options: Sequence[str]) -> str | None:
        """Ask a question answered by the first letter of an option.

        ``y`` picks the last (affirmative) option; ``n`` and Esc dismiss.
        """
        if not options:
            return None
        shortcuts: dict[str, str] = {}
        for option in options:
            if option:
                shortcuts.setdefault(option[0].lower(), option)
        choices = "/".join(f"[{option[0].lower()}]{option[1:]}" for option in options if option)
        try:
            while True:
                self._show_prompt(f"{message} {choices}")
                key = self._read_key()
                if key in _DISMISS_KEYS or key == "n":
                    return None
                if key == "y":
                    return options[-1]
                option = shortcuts.get(key.lower()) if len(key) == 1 else None
                if option is not None:
                    return option
        finally:
            self._clear_prompt()

    def pick(self, title: str, items: Sequence[tuple[str, str]]) -> str | None:
        """Choose from ``items``; typing an item's key selects it directly."""
        if not items:
            return None
        state = self.state
        keys = [key for key, _label in items]
        state.overlay_title = title
        state.overlay_lines = [label for _key, label in items]
        state.overlay_selected = 0
        try:
            while True:
                state.dirty = True
                self._redraw()
                key = self._read_key()
                if key in _DISMISS_KEYS:
                    return None
                if key == "ENTER":
                    return keys[state.overlay_selected]
                if key in keys:
                    return key
                if key in {"DOWN", "j", "TAB"}:
                    state.overlay_selected = (state.overlay_selected + 1) % len(items)
                elif key in {"UP", "k"}:
                    state.overlay_selected = (state.overlay_selected - 1) % len(items)
                elif key == "q":
                    return None
        finally:
            state.overlay_lines = None
            state.overlay_title = ""
            state.overlay_selected = 0
            state.dirty = True

    def _message(self, message: str, *, is_error: bool) -> None:
        self.state.status_message = message
        self.state.status_is_error = is_error
        self.state.status_message_until = self._clock() + self._message_seconds
        self.state.dirty = True

    def show_error(self, message: str) -> None:
        self._message(message, is_error=True)

    def show_info(self, message: str) -> None:
        self._message(message, is_error=False)


__all__ = ["MESSAGE_SECONDS", "TerminalPrompts"]
