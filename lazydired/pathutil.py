"""Path helpers shared by the listing, navigation, and mutation layers.

All paths handled by the core are absolute, normalized ``str`` values.
Trailing separators are meaningful only in listing lines, never in paths.
"""

from __future__ import annotations

import os

SEP = os.sep
PARENT_SENTINEL = ".." + SEP


def normalize(path: str) -> str:
    """Expand ``~`` and return an absolute, normalized path."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(path)))


def join(base: str, name: str) -> str:
    """Join ``name`` onto ``base`` and collapse ``..``/``.`` segments."""
    return os.path.normpath(os.path.join(base, name))


def dirname(path: str) -> str:
    """Return the parent directory; the filesystem root is its own parent."""
    return os.path.dirname(os.path.normpath(path))


def basename(path: str) -> str:
    """Return the last path component, ignoring trailing separators."""
    return os.path.basename(strip_trailing_slash(path))


def strip_trailing_slash(text: str) -> str:
    stripped = text.rstrip(SEP)
    if not stripped and text:
        return SEP
    return stripped


def has_trailing_slash(text: str) -> bool:
    return text.endswith(SEP)


def is_root(path: str) -> bool:
    return dirname(path) == os.path.normpath(path)


def is_within(path: str, directory: str) -> bool:
    """Return whether ``path`` lies strictly below ``directory``."""
    path = os.path.normpath(path)
    directory = os.path.normpath(directory)
    if path == directory:
        return False
    prefix = directory if directory.endswith(SEP) else directory + SEP
    return path.startswith(prefix)


__all__ = [
    "SEP",
    "PARENT_SENTINEL",
    "normalize",
    "join",
    "dirname",
    "basename",
    "strip_trailing_slash",
    "has_trailing_slash",
    "is_root",
    "is_within",
]
