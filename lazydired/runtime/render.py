"""Frame composition for the directory view.

Builds complete ANSI frames (header, listing rows, status/prompt row) from
``ViewState`` without writing anything; the loop owns terminal output.
Also provides the one-shot listing text used by ``--nopager``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, pad_ansi_line
from ..diagnostics import AggregatedDiagnostic, Severity
from ..highlight import colorize_lines, sanitize_terminal_text
from ..icons import icon_for
from ..input import KeyComboBinding
from ..listing import Listing
from ..ui_theme import UITheme
from .state import ViewState

CURSOR_MARKER = ">"
DIAGNOSTIC_GLYPH = "●"


@dataclass(frozen=True)
class RenderOptions:
    """Per-session presentation switches."""

    theme: UITheme
    style: str = "monokai"
    no_color: bool = False
    icons: bool = False


def _badge_color(theme: UITheme, letter: str) -> str:
    return {
        "M": theme.git_badge_modified,
        "R": theme.git_badge_modified,
        "A": theme.git_badge_added,
        "U": theme.git_badge_untracked,
        "D": theme.git_badge_deleted,
        "I": theme.git_badge_ignored,
    }.get(letter, "")


def _severity_color(theme: UITheme, severity: Severity) -> str:
    if severity == Severity.ERROR:
        return theme.diagnostic_error
    if severity == Severity.WARNING:
        return theme.diagnostic_warning
    return theme.diagnostic_info


def _styled(color: str, text: str, theme: UITheme) -> str:
    if not color:
        return text
    return f"{color}{text}{theme.reset}"


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply cursor styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", f"\033[0m{theme.reverse}") + theme.reset


def _with_background(text: str, theme: UITheme) -> str:
    if not text or not theme.selection:
        return text
    return theme.selection + text.replace("\033[0m", f"\033[0m{theme.selection}") + theme.reset


def format_listing_rows(
    listing: Listing,
    options: RenderOptions,
    badges: Mapping[int, str] | None = None,
    annotations: Mapping[int, AggregatedDiagnostic] | None = None,
) -> list[str]:
    """Return one display row per listing line.

    Each row is ``<badge> [icon ]<name>[  ● N problems]``. Badges and icons are
    gutter decorations only; the name column is exactly the line text.
    """
    theme = options.theme
    badges = badges or {}
    annotations = annotations or {}
    if options.no_color:
        names = [sanitize_terminal_text(line) for line in listing.lines]
    else:
        names = colorize_lines(listing.lines, options.style)

    rows: list[str] = []
    for index, name in enumerate(names):
        letter = badges.get(index, "")
        parts = [_styled(_badge_color(theme, letter), letter, theme) if letter else " ", " "]
        if options.icons:
            entry = listing.entry_at(index)
            if entry is not None:
                parts.append(_styled(theme.icon, icon_for(entry.name, entry.is_dir), theme))
                parts.append(" ")
            else:
                parts.append("  ")
        parts.append(name)
        annotation = annotations.get(index)
        if annotation is not None:
            color = _severity_color(theme, annotation.severity)
            parts.append("  ")
            parts.append(_styled(color, f"{DIAGNOSTIC_GLYPH} {annotation.message}", theme))
        rows.append("".join(parts))
    return rows


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = clip_ansi_line(left_text, left_limit)
    gap = " " * (usable - display_width(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def help_lines(bindings: Sequence[KeyComboBinding], theme: UITheme) -> list[str]:
    """Keybinding reference built from the live registry."""
    lines = [_styled(theme.help_heading, "KEYS", theme)]
    for binding in bindings:
        if not binding.description:
            continue
        keys = "/".join(binding.combos)
        lines.append(f"{_styled(theme.help_key, keys, theme)}  {binding.description}")
    lines.append("")
    lines.append(_styled(theme.help_dim, "press any key to close", theme))
    return lines


def content_rows(height: int) -> int:
    """Rows available for listing content (one header row, one status row)."""
    return max(1, height - 2)


def _listing_body(state: ViewState, options: RenderOptions, rows: int, width: int) -> list[str]:
    listing = state.listing
    if listing is None:
        return []
    theme = options.theme
    formatted = format_listing_rows(listing, options, state.badges, state.annotations)
    selected = state.selected_line_indices()
    body: list[str] = []
    for index in range(state.top, min(len(formatted), state.top + rows)):
        text = formatted[index]
        if index == state.cursor and not theme.reverse:
            text = CURSOR_MARKER + text[1:] if text.startswith(" ") else text
        text = pad_ansi_line(text, width)
        if index == state.cursor:
            text = selected_with_ansi(text, theme)
        elif index in selected:
            text = _with_background(text, theme)
        body.append(text)
    return body


def _overlay_body(state: ViewState, options: RenderOptions, rows: int, width: int) -> list[str]:
    theme = options.theme
    lines = state.overlay_lines or []
    body = [pad_ansi_line(_styled(theme.header, state.overlay_title, theme), width)]
    visible = max(1, rows - 1)
    start = max(0, state.overlay_selected - visible + 1)
    for index in range(start, min(len(lines), start + visible)):
        text = pad_ansi_line(f"  {sanitize_terminal_text(lines[index])}", width)
        if index == state.overlay_selected:
            text = selected_with_ansi(text, theme) if theme.reverse else CURSOR_MARKER + text[1:]
        body.append(text)
    return body


def _status_row(state: ViewState, options: RenderOptions, width: int) -> str:
    theme = options.theme
    if state.prompt_line is not None:
        return clip_ansi_line(_styled(theme.prompt, state.prompt_line, theme), max(1, width - 1))
    if state.status_message:
        color = theme.status_error if state.status_is_error else theme.status_info
        return _styled(color, clip_ansi_line(state.status_message, max(1, width - 1)), theme)
    position = f"{state.cursor + 1}/{state.line_count}" if state.line_count else "0/0"
    return _styled(theme.reverse, build_status_line(position, width), theme)


def build_frame(
    state: ViewState,
    options: RenderOptions,
    width: int,
    height: int,
    bindings: Sequence[KeyComboBinding] = (),
) -> str:
    """Compose one full-screen frame for the current state."""
    theme = options.theme
    width = max(1, width)
    rows = content_rows(height)
    out: list[str] = ["\033[H\033[J"]

    directory = state.listing.directory if state.listing is not None else ""
    out.append(_styled(theme.header, clip_ansi_line(sanitize_terminal_text(directory), width - 1), theme))
    out.append("\r\n")

    if state.show_help:
        body = [clip_ansi_line(line, width - 1) for line in help_lines(bindings, theme)[:rows]]
    elif state.overlay_lines is not None:
        body = _overlay_body(state, options, rows, width - 1)
    else:
        body = _listing_body(state, options, rows, width - 1)

    for row in range(rows):
        if row < len(body):
            out.append(body[row])
            if "\033" in body[row]:
                out.append("\033[0m")
        out.append("\r\n")

    out.append(_status_row(state, options, width))
    return "".join(out)


def render_plain_listing(listing: Listing, options: RenderOptions, badges: Mapping[int, str] | None = None,
                         annotations: Mapping[int, AggregatedDiagnostic] | None = None) -> str:
    """Listing text for non-interactive output, one entry per line."""
    out: list[str] = []
    for row in format_listing_rows(listing, options, badges, annotations):
        out.append(row.rstrip())
        if "\033" in row:
            out.append("\033[0m")
        out.append("\n")
    return "".join(out)


__all__ = [
    "RenderOptions",
    "build_frame",
    "build_status_line",
    "content_rows",
    "format_listing_rows",
    "help_lines",
    "render_plain_listing",
    "selected_with_ansi",
]
