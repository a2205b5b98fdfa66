"""Nerd-font glyphs shown in the listing gutter.

Icons are display-only decorations; they never become part of line text.
"""

from __future__ import annotations

DIRECTORY_ICON = ""
DEFAULT_FILE_ICON = ""

EXTENSION_ICONS: dict[str, str] = {
    # docs
    "txt": "",
    "doc": "",
    "docx": "",
    "pdf": "",
    "xls": "",
    "xlsx": "",
    "ppt": "",
    "pptx": "",
    # images
    "jpg": "",
    "jpeg": "",
    "png": "",
    "gif": "",
    "svg": "\U000f0721",
    # programming
    "json": "",
    "md": "",
    "py": "",
    "java": "",
    "c": "\U000f0671",
    "cpp": "\U000f031b",
    "cs": "\U000f031b",
    "go": "\U000f07d3",
    "rs": "",
    "rb": "",
    "php": "\U000f031f",
    "html": "\U000f031d",
    "css": "",
    "js": "",
    "jsx": "",
    "ts": "",
    "tsx": "",
    "sh": "",
    "sql": "",
    "lua": "\U000f08b1",
    "toml": "",
    "yml": "",
    "yaml": "",
    "ini": "",
    "xml": "\U000f05c0",
    "lock": "",
}

SPECIAL_FILE_ICONS: dict[str, str] = {
    ".gitignore": "",
    ".gitattributes": "",
    ".dockerignore": "",
    "Dockerfile": "",
    "Makefile": "",
    "LICENSE": "",
}


def icon_for(name: str, is_dir: bool) -> str:
    """Return the gutter glyph for one entry name."""
    if is_dir:
        return DIRECTORY_ICON
    special = SPECIAL_FILE_ICONS.get(name)
    if special is not None:
        return special
    _stem, dot, extension = name.rpartition(".")
    if dot and extension:
        return EXTENSION_ICONS.get(extension.lower(), DEFAULT_FILE_ICON)
    return DEFAULT_FILE_ICON


__all__ = [
    "DIRECTORY_ICON",
    "DEFAULT_FILE_ICON",
    "EXTENSION_ICONS",
    "SPECIAL_FILE_ICONS",
    "icon_for",
]
