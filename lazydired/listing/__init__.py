"""Listing model: what text represents a directory and how lines map to paths.

This package contains non-UI primitives:
- entry/listing datatypes
- the filesystem collaborator contract and its local implementation
- rendering and line-to-path resolution
"""

from __future__ import annotations

from .fs import Filesystem, LocalFilesystem
from .model import ListingModel, is_parent_sentinel, line_for, line_to_path, sort_entries
from .types import MISSING, DirectoryEntry, EntryKind, FileStat, Listing

__all__ = [
    "EntryKind",
    "FileStat",
    "MISSING",
    "DirectoryEntry",
    "Listing",
    "Filesystem",
    "LocalFilesystem",
    "ListingModel",
    "is_parent_sentinel",
    "line_to_path",
    "line_for",
    "sort_entries",
]
