"""Named directory bookmarks persisted through a key-value store.

Registers are free-form strings; saving onto an existing register overwrites
it without asking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .host import KeyValueStore

_LOGGER = logging.getLogger(__name__)

BOOKMARKS_KEY = "bookmarks"


@dataclass(frozen=True)
class Bookmark:
    register: str
    path: str


def _sanitize(raw: object) -> dict[str, str]:
    """Keep only non-empty string register/path pairs."""
    if not isinstance(raw, dict):
        return {}
    return {
        register: path
        for register, path in raw.items()
        if isinstance(register, str) and register and isinstance(path, str) and path
    }


class BookmarkRegistry:
    """Register → path table cached in memory and written through on change."""

    def __init__(self, store: KeyValueStore, key: str = BOOKMARKS_KEY) -> None:
        self.store = store
        self.key = key
        self._cache: dict[str, str] | None = None

    def _table(self) -> dict[str, str]:
        if self._cache is None:
            self._cache = _sanitize(self.store.get(self.key, {}))
        return self._cache

    def _persist(self) -> None:
        self.store.set(self.key, dict(self._table()))

    def save(self, register: str, path: str) -> None:
        if not register:
            raise ValueError("bookmark register must be non-empty")
        table = self._table()
        if register in table and table[register] != path:
            _LOGGER.info("bookmark %r overwritten: %s -> %s", register, table[register], path)
        table[register] = path
        self._persist()

    def lookup(self, register: str) -> str | None:
        return self._table().get(register)

    def list(self) -> tuple[Bookmark, ...]:
        return tuple(Bookmark(register, path) for register, path in sorted(self._table().items()))

    def delete(self, register: str) -> bool:
        table = self._table()
        if register not in table:
            return False
        del table[register]
        self._persist()
        return True

    def reload(self) -> None:
        self._cache = None

    def __len__(self) -> int:
        return len(self._table())


__all__ = ["BOOKMARKS_KEY", "Bookmark", "BookmarkRegistry"]
