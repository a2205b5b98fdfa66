"""Command boundary for the directory browser.

``DiredSession`` owns the session-wide state objects and exposes one method
per named command. Commands read the cursor from the editor surface, ask for
input through the prompts collaborator, run the mutation or navigation, and
re-render on success. ``DiredError`` is reported once through
``prompts.show_error`` and never escapes a command.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from . import pathutil
from .bookmarks import BookmarkRegistry
from .config import DiredSettings
from .diagnostics import AnnotationSource, DiagnosticsAggregator, StaticAnnotationSource
from .errors import BatchDeleteError, DiredError
from .git_status import collect_git_status
from .host import EditorSurface, KeyValueStore, Prompts
from .listing import Filesystem, ListingModel, is_parent_sentinel, line_to_path
from .navigation import NavigationState, selected_lines
from .operations import FileOperationEngine
from .workspace import find_project_root

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandSpec:
    name: str
    title: str


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec("open_at_cursor", "Open entry under cursor"),
    CommandSpec("open_parent", "Open parent directory"),
    CommandSpec("open_home", "Open project root / home"),
    CommandSpec("rename", "Rename entry under cursor"),
    CommandSpec("delete", "Delete selected entries"),
    CommandSpec("create", "Create file (trailing / for directory)"),
    CommandSpec("create_dir", "Create directory"),
    CommandSpec("refresh", "Refresh listing"),
    CommandSpec("add_bookmark", "Bookmark current directory"),
    CommandSpec("jump_to_bookmark", "Jump to bookmark"),
    CommandSpec("remove_bookmark", "Remove bookmark"),
)


class DiredSession:
    """Owns navigation, mutation, bookmark, and diagnostics state for one host."""

    def __init__(
        self,
        fs: Filesystem,
        surface: EditorSurface,
        prompts: Prompts,
        store: KeyValueStore,
        *,
        settings: DiredSettings | None = None,
        annotations: AnnotationSource | None = None,
        git_status_for: Callable[[str], dict[str, str]] | None = None,
        project_root_for: Callable[[str], str | None] | None = None,
    ) -> None:
        self.settings = settings if settings is not None else DiredSettings()
        self.fs = fs
        self.surface = surface
        self.prompts = prompts
        self.listing_model = ListingModel(fs, show_hidden=self.settings.show_hidden)
        if project_root_for is None:
            project_root_for = functools.partial(find_project_root, markers=self.settings.workspace_markers)
        self.navigation = NavigationState(self.listing_model, surface, project_root_for=project_root_for)
        self.engine = FileOperationEngine(fs, prompts, use_trash=self.settings.use_trash)
        self.bookmarks = BookmarkRegistry(store)
        self.diagnostics = DiagnosticsAggregator(annotations if annotations is not None else StaticAnnotationSource())
        if git_status_for is None and self.settings.git_status:
            git_status_for = collect_git_status
        self._git_status_for = git_status_for

    # -- helpers ---------------------------------------------------------

    def _run(self, name: str, action: Callable[[], object]) -> bool:
        """Run one command, reporting ``DiredError`` instead of raising it."""
        try:
            action()
        except DiredError as exc:
            _LOGGER.warning("%s failed: %s", name, exc)
            self.prompts.show_error(str(exc))
            return False
        return True

    @property
    def current_dir(self) -> str | None:
        return self.navigation.current_dir

    def cursor_line(self) -> str | None:
        listing = self.navigation.listing
        selections = self.surface.selections()
        if listing is None or not selections:
            return None
        index = selections[0].active_line
        if 0 <= index < len(listing):
            return listing.lines[index]
        return None

    def selected_lines(self) -> list[str]:
        listing = self.navigation.listing
        if listing is None:
            return []
        return selected_lines(listing, self.surface.selections())

    def refresh_annotations(self) -> None:
        """Recompute diagnostics roll-up and git badges for the current listing."""
        listing = self.navigation.listing
        if listing is None:
            return
        self.surface.set_annotations(self.diagnostics.refresh(listing.directory, listing.lines))

        badges: dict[int, str] = {}
        if self._git_status_for is not None:
            status = self._git_status_for(listing.directory)
            for index, line in enumerate(listing.lines):
                if is_parent_sentinel(line):
                    continue
                letter = status.get(line_to_path(listing.directory, line))
                if letter:
                    badges[index] = letter
        self.surface.set_decorations(badges)

    def poll(self) -> bool:
        """Refresh annotations when the source changed; return whether it did."""
        if self.navigation.listing is None or not self.diagnostics.is_stale():
            return False
        self.refresh_annotations()
        return True

    def _rerender(self) -> None:
        self.navigation.refresh()
        self.refresh_annotations()

    def initial_directory(self, path: str | None = None) -> str:
        if path:
            target = pathutil.normalize(path)
            return target if self.fs.stat(target).is_dir else pathutil.dirname(target)
        active = self.surface.active_file()
        if active:
            return pathutil.dirname(active)
        return os.getcwd()

    # -- navigation commands ---------------------------------------------

    def open(self, path: str | None = None) -> bool:
        def action() -> None:
            self.navigation.open(self.initial_directory(path))
            self.refresh_annotations()

        return self._run("open", action)

    def open_at_cursor(self) -> bool:
        def action() -> None:
            line = self.cursor_line()
            if line is None or self.current_dir is None:
                return
            if is_parent_sentinel(line):
                self.navigation.open_parent()
                self.refresh_annotations()
                return
            target = line_to_path(self.current_dir, line)
            if self.fs.stat(target).is_dir:
                self.navigation.open(target)
                self.refresh_annotations()
                return
            self.navigation.save_selections()
            self.surface.open_file(target)

        return self._run("open_at_cursor", action)

    def open_parent(self) -> bool:
        def action() -> None:
            if self.navigation.open_parent() is not None:
                self.refresh_annotations()

        return self._run("open_parent", action)

    def open_home(self) -> bool:
        def action() -> None:
            self.navigation.open_home()
            self.refresh_annotations()

        return self._run("open_home", action)

    def refresh(self) -> bool:
        return self._run("refresh", self._rerender)

    # -- mutation commands -----------------------------------------------

    def rename(self) -> bool:
        def action() -> None:
            line = self.cursor_line()
            if line is None or self.current_dir is None or is_parent_sentinel(line):
                return
            new_name = self.prompts.input_box("Rename", "Enter a new filename", value=line)
            if self.engine.rename(self.current_dir, line, new_name).changed:
                self._rerender()

        return self._run("rename", action)

    def delete(self) -> bool:
        def action() -> None:
            if self.current_dir is None:
                return
            try:
                result = self.engine.delete(self.current_dir, self.selected_lines())
            except BatchDeleteError as exc:
                if exc.deleted:
                    self._rerender()
                raise
            if result.changed:
                self._rerender()

        return self._run("delete", action)

    def create(self) -> bool:
        def action() -> None:
            if self.current_dir is None:
                return
            name = self.prompts.input_box("Create New File / Directory", "Enter a name for the new file")
            result = self.engine.create(self.current_dir, name)
            if not result.changed:
                return
            self._rerender()
            if result.open_path is not None:
                self.navigation.save_selections()
                self.surface.open_file(result.open_path)

        return self._run("create", action)

    def create_dir(self) -> bool:
        def action() -> None:
            if self.current_dir is None:
                return
            name = self.prompts.input_box("Create New Directory", "Enter a name for the new directory")
            if self.engine.create_directory(self.current_dir, name).changed:
                self._rerender()

        return self._run("create_dir", action)

    # -- bookmarks -------------------------------------------------------

    def _bookmark_items(self) -> list[tuple[str, str]]:
        return [(bookmark.register, f"{bookmark.register}  {bookmark.path}") for bookmark in self.bookmarks.list()]

    def add_bookmark(self) -> bool:
        def action() -> None:
            if self.current_dir is None:
                return
            register = self.prompts.input_box("Bookmark", f"Register for {self.current_dir}")
            if not register:
                return
            self.bookmarks.save(register, self.current_dir)
            self.prompts.show_info(f"Bookmarked {self.current_dir} as {register!r}")

        return self._run("add_bookmark", action)

    def jump_to_bookmark(self) -> bool:
        def action() -> None:
            if not len(self.bookmarks):
                self.prompts.show_info("No bookmarks")
                return
            register = self.prompts.pick("Jump to bookmark", self._bookmark_items())
            if register is None:
                return
            path = self.bookmarks.lookup(register)
            if path is None:
                return
            self.navigation.open(path)
            self.refresh_annotations()

        return self._run("jump_to_bookmark", action)

    def remove_bookmark(self) -> bool:
        def action() -> None:
            if not len(self.bookmarks):
                self.prompts.show_info("No bookmarks")
                return
            register = self.prompts.pick("Remove bookmark", self._bookmark_items())
            if register is not None and self.bookmarks.delete(register):
                self.prompts.show_info(f"Removed bookmark {register!r}")

        return self._run("remove_bookmark", action)

    def run_command(self, name: str) -> bool:
        """Dispatch a command by its registered name."""
        if name not in {spec.name for spec in COMMANDS}:
            raise KeyError(name)
        return getattr(self, name)()


__all__ = ["CommandSpec", "COMMANDS", "DiredSession"]
