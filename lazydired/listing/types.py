"""Domain datatypes for directory listings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..pathutil import SEP


class EntryKind(Enum):
    """Closed set of entry kinds the listing distinguishes."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileStat:
    """Result of a ``stat`` call; a missing path is a normal result."""

    exists: bool
    kind: EntryKind | None = None

    @property
    def is_dir(self) -> bool:
        return self.exists and self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.exists and self.kind is EntryKind.FILE


MISSING = FileStat(exists=False)


@dataclass(frozen=True)
class DirectoryEntry:
    """One child of a rendered directory."""

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def display_line(self) -> str:
        return self.name + SEP if self.is_dir else self.name


@dataclass(frozen=True)
class Listing:
    """Ordered display lines for one directory.

    ``entries`` aligns with ``lines`` after the optional parent sentinel.
    """

    directory: str
    lines: tuple[str, ...]
    entries: tuple[DirectoryEntry, ...]
    has_parent: bool

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def entry_at(self, line_index: int) -> DirectoryEntry | None:
        offset = line_index - (1 if self.has_parent else 0)
        if 0 <= offset < len(self.entries):
            return self.entries[offset]
        return None

    def __len__(self) -> int:
        return len(self.lines)


__all__ = [
    "EntryKind",
    "FileStat",
    "MISSING",
    "DirectoryEntry",
    "Listing",
]
