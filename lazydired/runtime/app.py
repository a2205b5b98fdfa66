"""Interactive directory browser bootstrap and main loop.

Wires the session to the terminal surface, prompt widgets, and key registry,
then runs a redraw/read/dispatch loop. Idle ticks poll the diagnostics source
so annotations follow external changes.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import time
from collections.abc import Callable

from .. import pathutil
from ..config import DiredSettings
from ..diagnostics import AnnotationSource
from ..editor import launch_editor
from ..host import KeyValueStore
from ..input import KeyComboBinding, KeyComboRegistry, read_key
from ..listing import Filesystem, LocalFilesystem
from ..session import DiredSession
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .prompts import TerminalPrompts
from .render import RenderOptions, build_frame, content_rows, render_plain_listing
from .state import ViewState
from .surface import TerminalEditorSurface

_LOGGER = logging.getLogger(__name__)

IDLE_POLL_MS = 500


class BrowserApp:
    """One interactive browsing session bound to a terminal."""

    def __init__(
        self,
        terminal: TerminalController,
        stdin_fd: int,
        options: RenderOptions,
        store: KeyValueStore,
        *,
        settings: DiredSettings | None = None,
        fs: Filesystem | None = None,
        annotations: AnnotationSource | None = None,
        read_key_fn: Callable[[int, int | None], str] = read_key,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.terminal = terminal
        self.stdin_fd = stdin_fd
        self.options = options
        self.state = ViewState()
        self._read_key_fn = read_key_fn
        self._clock = clock
        self._running = True
        self.surface = TerminalEditorSurface(self.state, self._open_in_editor)
        self.prompts = TerminalPrompts(self.state, self._read_prompt_key, self.redraw, clock=clock)
        self.session = DiredSession(
            fs if fs is not None else LocalFilesystem(),
            self.surface,
            self.prompts,
            store,
            settings=settings,
            annotations=annotations,
        )
        self.registry = self._build_registry()

    # -- terminal plumbing -------------------------------------------------

    def _terminal_size(self) -> os.terminal_size:
        return shutil.get_terminal_size((80, 24))

    def _read_prompt_key(self) -> str:
        while True:
            key = self._read_key_fn(self.stdin_fd, None)
            if key:
                return key

    def _open_in_editor(self, path: str) -> None:
        error = launch_editor(path, self.terminal.disable_tui_mode, self.terminal.enable_tui_mode)
        if error:
            self.prompts.show_error(error)
        self.state.dirty = True

    def scroll_into_view(self, rows: int) -> None:
        state = self.state
        state.clamp_cursor()
        previous_top = state.top
        if state.cursor < state.top:
            state.top = state.cursor
        elif state.cursor >= state.top + rows:
            state.top = state.cursor - rows + 1
        state.top = max(0, min(state.top, max(0, state.line_count - rows)))
        if state.top != previous_top:
            state.dirty = True

    def redraw(self) -> None:
        term = self._terminal_size()
        self.scroll_into_view(content_rows(term.lines))
        self.terminal.write(build_frame(self.state, self.options, term.columns, term.lines, self.registry.bindings()))
        self.state.dirty = False

    # -- cursor and selection ----------------------------------------------

    def move_cursor(self, delta: int) -> bool:
        self.state.cursor += delta
        self.state.clamp_cursor()
        self.state.dirty = True
        return True

    def cursor_to(self, index: int) -> bool:
        self.state.cursor = index
        self.state.clamp_cursor()
        self.state.dirty = True
        return True

    def page(self, direction: int) -> bool:
        return self.move_cursor(direction * content_rows(self._terminal_size().lines))

    def toggle_visual(self) -> bool:
        state = self.state
        state.visual_anchor = None if state.visual_anchor is not None else state.cursor
        state.dirty = True
        return True

    def clear_selection(self) -> bool:
        self.state.visual_anchor = None
        self.state.extra_selections = []
        self.state.dirty = True
        return True

    def toggle_help(self) -> bool:
        self.state.show_help = not self.state.show_help
        self.state.dirty = True
        return True

    def quit(self) -> bool:
        self._running = False
        return True

    def _command(self, name: str) -> Callable[[], bool]:
        def run() -> bool:
            self.session.run_command(name)
            self.state.dirty = True
            return True

        return run

    def _build_registry(self) -> KeyComboRegistry:
        command = self._command
        return KeyComboRegistry().register_bindings(
            KeyComboBinding(("ENTER", "l", "RIGHT"), command("open_at_cursor"), "open entry"),
            KeyComboBinding(("-", "h", "LEFT"), command("open_parent"), "parent directory"),
            KeyComboBinding(("~",), command("open_home"), "project root / home"),
            KeyComboBinding(("j", "DOWN"), lambda: self.move_cursor(1), "down"),
            KeyComboBinding(("k", "UP"), lambda: self.move_cursor(-1), "up"),
            KeyComboBinding(("g", "HOME"), lambda: self.cursor_to(0), "first line"),
            KeyComboBinding(("G", "END"), lambda: self.cursor_to(self.state.line_count - 1), "last line"),
            KeyComboBinding(("PAGE_DOWN", "CTRL_D"), lambda: self.page(1), "page down"),
            KeyComboBinding(("PAGE_UP", "CTRL_U"), lambda: self.page(-1), "page up"),
            KeyComboBinding(("V",), self.toggle_visual, "visual selection"),
            KeyComboBinding(("ESC",), self.clear_selection, "clear selection"),
            KeyComboBinding(("R",), command("rename"), "rename"),
            KeyComboBinding(("D",), command("delete"), "delete selection"),
            KeyComboBinding(("%",), command("create"), "create file (trailing / for directory)"),
            KeyComboBinding(("d",), command("create_dir"), "create directory"),
            KeyComboBinding(("r", "CTRL_L"), command("refresh"), "refresh"),
            KeyComboBinding(("m",), command("add_bookmark"), "bookmark directory"),
            KeyComboBinding(("'",), command("jump_to_bookmark"), "jump to bookmark"),
            KeyComboBinding(("M",), command("remove_bookmark"), "remove bookmark"),
            KeyComboBinding(("?",), self.toggle_help, "help"),
            KeyComboBinding(("q", "CTRL_C"), self.quit, "quit"),
        )

    # -- loop ----------------------------------------------------------------

    def handle_key(self, key: str) -> None:
        if self.state.show_help:
            self.toggle_help()
            return
        self.registry.dispatch(key)

    def _expire_status(self) -> None:
        state = self.state
        if state.status_message and self._clock() >= state.status_message_until:
            state.status_message = ""
            state.status_message_until = 0.0
            state.dirty = True

    def run(self) -> None:
        self._running = True
        with self.terminal.raw_mode():
            while self._running:
                self._expire_status()
                if self.state.dirty:
                    self.redraw()
                key = self._read_key_fn(self.stdin_fd, IDLE_POLL_MS)
                if not key:
                    if self.session.poll():
                        self.state.dirty = True
                    continue
                self.handle_key(key)


def _headless_session(
    state: ViewState,
    store: KeyValueStore,
    settings: DiredSettings,
    annotations: AnnotationSource | None,
) -> DiredSession:
    surface = TerminalEditorSurface(state, lambda _path: None)
    prompts = TerminalPrompts(state, lambda: "ESC", lambda: None)
    return DiredSession(LocalFilesystem(), surface, prompts, store, settings=settings, annotations=annotations)


def render_listing_once(
    path: str | None,
    store: KeyValueStore,
    settings: DiredSettings,
    options: RenderOptions,
    annotations: AnnotationSource | None = None,
) -> tuple[str, str | None]:
    """Render the listing for ``path`` once; return ``(text, error)``."""
    state = ViewState()
    session = _headless_session(state, store, settings, annotations)
    if not session.open(path) or state.listing is None:
        return "", state.status_message or f"Cannot open {path}"
    return render_plain_listing(state.listing, options, state.badges, state.annotations), None


def run_browser(
    path: str | None,
    store: KeyValueStore,
    settings: DiredSettings,
    *,
    no_color: bool = False,
    nopager: bool = False,
    annotations: AnnotationSource | None = None,
) -> int:
    """Launch the browser on ``path`` (or print its listing); return an exit code."""
    interactive = not nopager and os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())
    color = not no_color and (interactive or os.isatty(sys.stdout.fileno()))
    options = RenderOptions(
        theme=resolve_theme(settings.theme, no_color=not color),
        style=settings.style,
        no_color=not color,
        icons=settings.nerd_font_icons,
    )

    if not interactive:
        text, error = render_listing_once(path, store, settings, options, annotations)
        if error is not None:
            sys.stderr.write(f"{error}\n")
            return 1
        sys.stdout.write(text)
        return 0

    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    app = BrowserApp(terminal, sys.stdin.fileno(), options, store, settings=settings, annotations=annotations)
    if path and not os.path.isdir(path):
        app.state.active_file = pathutil.normalize(path)
    if not app.session.open(path):
        sys.stderr.write(f"{app.state.status_message}\n")
        return 1
    _LOGGER.info("browsing %s", app.session.current_dir)
    app.run()
    return 0


__all__ = ["BrowserApp", "IDLE_POLL_MS", "render_listing_once", "run_browser"]
