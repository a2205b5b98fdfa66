"""Create/rename/delete engine driven by listing lines.

Each operation returns an ``OperationResult``; ``changed`` tells the caller to
re-render. Declined confirmations and empty names return an unchanged result.
Failures raise ``DiredError`` subclasses for the command boundary to report.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from . import pathutil
from .errors import BatchDeleteError, DiredError, InvalidTargetError, NotFoundError
from .host import Prompts
from .listing import Filesystem, is_parent_sentinel, line_to_path

_LOGGER = logging.getLogger(__name__)

OVERWRITE = "Overwrite"
DELETE = "Delete"
CANCEL = "Cancel"


@dataclass(frozen=True)
class OperationResult:
    changed: bool = False
    open_path: str | None = None


UNCHANGED = OperationResult()


class FileOperationEngine:
    """Filesystem mutations with confirmation and conflict policy."""

    def __init__(self, fs: Filesystem, prompts: Prompts, *, use_trash: bool = True) -> None:
        self.fs = fs
        self.prompts = prompts
        self.use_trash = use_trash

    def _ensure_directory(self, path: str) -> None:
        if not self.fs.stat(path).exists:
            self.fs.create_directory(path)

    def create(self, directory: str, name: str | None) -> OperationResult:
        """Create a file, or a directory when ``name`` ends with a separator.

        Existing paths are left untouched. New files are reported through
        ``open_path`` so the caller can open them.
        """
        if not name:
            return UNCHANGED
        target = pathutil.join(directory, name)
        if self.fs.stat(target).exists:
            _LOGGER.debug("create skipped, %s exists", target)
            return UNCHANGED

        if pathutil.has_trailing_slash(name):
            self.fs.create_directory(target)
            return OperationResult(changed=True)

        self._ensure_directory(pathutil.dirname(target))
        self.fs.write_file(target, b"")
        return OperationResult(changed=True, open_path=target)

    def create_directory(self, directory: str, name: str | None) -> OperationResult:
        if not name:
            return UNCHANGED
        target = pathutil.join(directory, name)
        if self.fs.stat(target).is_dir:
            return UNCHANGED
        self.fs.create_directory(target)
        return OperationResult(changed=True)

    def resolve_rename_target(self, directory: str, line: str, new_name: str) -> tuple[str, str]:
        """Return ``(src, dst)`` with the implicit move-into-directory rule applied."""
        src = line_to_path(directory, line)
        dst = line_to_path(directory, new_name)
        if self.fs.stat(dst).is_dir:
            dst = pathutil.join(dst, pathutil.basename(src))
        return src, dst

    def rename(self, directory: str, line: str, new_name: str | None) -> OperationResult:
        if not new_name or not line or is_parent_sentinel(line):
            return UNCHANGED

        src = line_to_path(directory, line)
        if line_to_path(directory, new_name) == src:
            return UNCHANGED
        if not self.fs.stat(src).exists:
            raise NotFoundError(src)

        src, dst = self.resolve_rename_target(directory, line, new_name)
        if src == dst:
            return UNCHANGED

        target = self.fs.stat(dst)
        if target.is_dir:
            raise InvalidTargetError(src, dst)
        if target.exists:
            choice = self.prompts.confirm("Overwrite existing file?", (CANCEL, OVERWRITE))
            if choice != OVERWRITE:
                return UNCHANGED

        self._ensure_directory(pathutil.dirname(dst))
        self.fs.rename(src, dst, overwrite=True)
        return OperationResult(changed=True)

    def _delete_message(self, directory: str, lines: Sequence[str]) -> str:
        if len(lines) > 1:
            return f"Delete {len(lines)} files?"
        name = pathutil.strip_trailing_slash(lines[0])
        path = line_to_path(directory, lines[0])
        if self.fs.stat(path).is_dir and self.fs.read_dir(path):
            return f"Delete non-empty directory {name}?"
        return f"Delete {name}?"

    def delete(self, directory: str, lines: Sequence[str]) -> OperationResult:
        """Delete every listed entry after one confirmation for the batch.

        The parent sentinel is never deleted. Items are deleted one by one and
        a failing item does not stop the rest; failures are raised together as
        ``BatchDeleteError`` once the batch finishes.
        """
        targets = [line for line in dict.fromkeys(lines) if line and not is_parent_sentinel(line)]
        if not targets:
            return UNCHANGED

        choice = self.prompts.confirm(self._delete_message(directory, targets), (CANCEL, DELETE))
        if choice != DELETE:
            return UNCHANGED

        failures: list[tuple[str, str]] = []
        deleted = 0
        for line in targets:
            path = line_to_path(directory, line)
            try:
                self.fs.delete(path, recursive=True, recoverable=self.use_trash)
            except DiredError as exc:
                _LOGGER.warning("delete failed for %s: %s", path, exc)
                failures.append((path, str(exc)))
                continue
            deleted += 1

        if failures:
            raise BatchDeleteError(failures, deleted)
        return OperationResult(changed=True)


__all__ = [
    "OperationResult",
    "UNCHANGED",
    "FileOperationEngine",
    "OVERWRITE",
    "DELETE",
    "CANCEL",
]
