"""Git status badges for listing lines.

Collects one-letter status codes per path from ``git status --porcelain``.
Parent directories inherit ``M`` when any non-ignored child changed.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from . import pathutil

_LOGGER = logging.getLogger(__name__)

STATUS_MODIFIED = "M"
STATUS_ADDED = "A"
STATUS_DELETED = "D"
STATUS_RENAMED = "R"
STATUS_UNTRACKED = "U"
STATUS_IGNORED = "I"

# Lower rank wins when several records land on the same path.
_STATUS_RANK = {
    STATUS_DELETED: 0,
    STATUS_MODIFIED: 1,
    STATUS_RENAMED: 2,
    STATUS_ADDED: 3,
    STATUS_UNTRACKED: 4,
    STATUS_IGNORED: 5,
}


def _run_git(cwd: str, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", cwd, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        _LOGGER.debug("git %s failed in %s: %s", " ".join(args), cwd, exc)
        return None


def resolve_repo_root(path: str, timeout_seconds: float = 0.5) -> str | None:
    """Return the worktree root containing ``path``, or ``None`` outside git."""
    cwd = path if Path(path).is_dir() else pathutil.dirname(path)
    proc = _run_git(cwd, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    top = proc.stdout.strip()
    return pathutil.normalize(top) if top else None


def _iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        records.append((status, token[3:]))

        # Renamed/copied records carry the source path as an extra token.
        if "R" in status or "C" in status:
            index += 1

    return records


def status_letter(code: str) -> str:
    """Map a two-character porcelain code to a single badge letter."""
    if code == "??":
        return STATUS_UNTRACKED
    if code == "!!":
        return STATUS_IGNORED
    if "D" in code:
        return STATUS_DELETED
    if "R" in code or "C" in code:
        return STATUS_RENAMED
    if "A" in code:
        return STATUS_ADDED
    return STATUS_MODIFIED


def _merge(overlay: dict[str, str], path: str, letter: str) -> None:
    existing = overlay.get(path)
    if existing is None or _STATUS_RANK[letter] < _STATUS_RANK[existing]:
        overlay[path] = letter


def collect_git_status(directory: str, timeout_seconds: float = 0.5) -> dict[str, str]:
    """Return ``{absolute_path: letter}`` for paths inside ``directory``."""
    repo_root = resolve_repo_root(directory, timeout_seconds)
    if repo_root is None:
        return {}

    proc = _run_git(
        repo_root,
        ["status", "--porcelain=v1", "-z", "--untracked-files=normal", "--ignored=matching"],
        timeout_seconds,
    )
    if proc is None or proc.returncode != 0:
        return {}

    overlay: dict[str, str] = {}
    for code, rel_path in _iter_porcelain_records(proc.stdout):
        if not rel_path:
            continue
        letter = status_letter(code)
        target = pathutil.join(repo_root, pathutil.strip_trailing_slash(rel_path))
        _merge(overlay, target, letter)
        if letter == STATUS_IGNORED:
            continue

        parent = pathutil.dirname(target)
        while parent != repo_root and pathutil.is_within(parent, repo_root):
            _merge(overlay, parent, STATUS_MODIFIED)
            parent = pathutil.dirname(parent)

    # git reports resolved paths; re-base them onto the directory as given.
    real_directory = os.path.realpath(directory)
    result: dict[str, str] = {}
    for path, letter in overlay.items():
        if path == real_directory:
            result[directory] = letter
        elif pathutil.is_within(path, real_directory):
            result[pathutil.join(directory, os.path.relpath(path, real_directory))] = letter
    return result


__all__ = [
    "STATUS_MODIFIED",
    "STATUS_ADDED",
    "STATUS_DELETED",
    "STATUS_RENAMED",
    "STATUS_UNTRACKED",
    "STATUS_IGNORED",
    "resolve_repo_root",
    "status_letter",
    "collect_git_status",
]
