"""Syntax highlighting for listing lines.

A small Pygments lexer classifies the parent sentinel, directories, hidden
entries, and file extensions; the terminal formatter turns tokens into ANSI.
"""

from __future__ import annotations

import re

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.styles import get_style_by_name
from pygments.token import Comment, Keyword, Name, Text
from pygments.util import ClassNotFound

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()
DEFAULT_STYLE = "monokai"


class ListingLexer(RegexLexer):
    """Lexer for directory listing buffers (one entry per line)."""

    name = "Directory listing"
    aliases = ["lazydired", "dirlisting"]
    filenames: list[str] = []

    tokens = {
        "root": [
            (r"^\.\./$", Keyword),
            (r"^[^\n]*/$", Name.Namespace),
            (r"^\.[^\n]*$", Comment),
            (r"^([^\n]*?)(\.[^.\n/]+)$", bygroups(Name, Name.Attribute)),
            (r"[^\n]+", Name),
            (r"\n", Text),
        ],
    }


_LEXER = ListingLexer()


def sanitize_terminal_text(text: str) -> str:
    """Escape terminal control bytes so file names cannot move the cursor."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_lines(lines: list[str] | tuple[str, ...], style: str = DEFAULT_STYLE) -> list[str]:
    """Return ANSI-colored variants of ``lines`` (same count, same order)."""
    if not lines:
        return []
    source = "\n".join(sanitize_terminal_text(line) for line in lines) + "\n"
    rendered = pygments_highlight(source, _LEXER, _formatter_for_style(normalize_style(style)))
    colored = rendered.split("\n")
    if len(colored) < len(lines):
        return [sanitize_terminal_text(line) for line in lines]
    return colored[: len(lines)]


__all__ = [
    "DEFAULT_STYLE",
    "ListingLexer",
    "sanitize_terminal_text",
    "normalize_style",
    "colorize_lines",
]
