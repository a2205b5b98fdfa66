"""Project-root discovery for the "home" navigation target."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from . import pathutil
from .git_status import resolve_repo_root

DEFAULT_WORKSPACE_MARKERS: tuple[str, ...] = (".git", "pyproject.toml", "setup.py", "package.json", ".hg")


def find_marker_root(path: str, markers: Sequence[str] = DEFAULT_WORKSPACE_MARKERS) -> str | None:
    """Walk up from ``path`` and return the first directory holding a marker."""
    current = Path(path)
    if not current.is_dir():
        current = current.parent
    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in markers):
            return pathutil.normalize(str(candidate))
    return None


def find_project_root(path: str, markers: Sequence[str] = DEFAULT_WORKSPACE_MARKERS) -> str | None:
    """Return the enclosing project root of ``path``, preferring the git worktree."""
    return resolve_repo_root(path) or find_marker_root(path, markers)


__all__ = ["DEFAULT_WORKSPACE_MARKERS", "find_marker_root", "find_project_root"]
