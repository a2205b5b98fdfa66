"""Filesystem collaborator contract and the local-disk implementation."""

from __future__ import annotations

import contextlib
import errno
import logging
import os
import shutil
from collections.abc import Iterator
from typing import Protocol

from send2trash import send2trash

from ..errors import IOFailureError, NotFoundError
from .types import MISSING, EntryKind, FileStat

_LOGGER = logging.getLogger(__name__)


class Filesystem(Protocol):
    """Narrow filesystem capability used by the listing and mutation layers."""

    def stat(self, path: str) -> FileStat: ...

    def read_dir(self, path: str) -> list[tuple[str, EntryKind]]: ...

    def rename(self, src: str, dst: str, *, overwrite: bool) -> None: ...

    def delete(self, path: str, *, recursive: bool, recoverable: bool) -> None: ...

    def create_directory(self, path: str) -> None: ...

    def write_file(self, path: str, data: bytes) -> None: ...

    def read(self, path: str) -> bytes: ...


@contextlib.contextmanager
def _translate_os_errors(action: str, path: str) -> Iterator[None]:
    """Map ``OSError`` into the error taxonomy reported at the command boundary."""
    try:
        yield
    except FileNotFoundError as exc:
        raise NotFoundError(path, exc.strerror) from exc
    except OSError as exc:
        raise IOFailureError(action, path, exc) from exc


def _kind_of(entry: os.DirEntry[str]) -> EntryKind:
    try:
        return EntryKind.DIRECTORY if entry.is_dir() else EntryKind.FILE
    except OSError:
        return EntryKind.FILE


class LocalFilesystem:
    """``Filesystem`` backed by ``os``/``shutil`` with trash via send2trash."""

    def stat(self, path: str) -> FileStat:
        try:
            is_dir = os.path.isdir(path)
            exists = is_dir or os.path.lexists(path)
        except OSError:
            return MISSING
        if not exists:
            return MISSING
        return FileStat(exists=True, kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE)

    def read_dir(self, path: str) -> list[tuple[str, EntryKind]]:
        with _translate_os_errors("read", path):
            with os.scandir(path) as entries:
                return [(entry.name, _kind_of(entry)) for entry in entries]

    def rename(self, src: str, dst: str, *, overwrite: bool) -> None:
        with _translate_os_errors("rename", src):
            if not overwrite and os.path.lexists(dst):
                raise FileExistsError(errno.EEXIST, "Destination exists", dst)
            try:
                os.replace(src, dst)
            except OSError as exc:
                if exc.errno != errno.EXDEV:
                    raise
                shutil.move(src, dst)
        _LOGGER.info("renamed %s -> %s", src, dst)

    def delete(self, path: str, *, recursive: bool, recoverable: bool) -> None:
        with _translate_os_errors("delete", path):
            if not os.path.lexists(path):
                raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
            if recoverable:
                send2trash(path)
            elif os.path.isdir(path) and not os.path.islink(path):
                if recursive:
                    shutil.rmtree(path)
                else:
                    os.rmdir(path)
            else:
                os.unlink(path)
        _LOGGER.info("deleted %s (recoverable=%s)", path, recoverable)

    def create_directory(self, path: str) -> None:
        with _translate_os_errors("create", path):
            os.makedirs(path, exist_ok=True)
        _LOGGER.info("created directory %s", path)

    def write_file(self, path: str, data: bytes) -> None:
        with _translate_os_errors("write", path):
            with open(path, "wb") as handle:
                handle.write(data)
        _LOGGER.info("wrote %d bytes to %s", len(data), path)

    def read(self, path: str) -> bytes:
        with _translate_os_errors("read", path):
            with open(path, "rb") as handle:
                return handle.read()


__all__ = ["Filesystem", "LocalFilesystem"]
