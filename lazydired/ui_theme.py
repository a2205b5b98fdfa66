"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (chrome, badges, diagnostics). Listing name
highlighting remains a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    header: str
    selection: str
    icon: str
    git_badge_modified: str
    git_badge_added: str
    git_badge_deleted: str
    git_badge_untracked: str
    git_badge_ignored: str
    diagnostic_error: str
    diagnostic_warning: str
    diagnostic_info: str
    status_error: str
    status_info: str
    prompt: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;81m",
    selection="\033[48;5;238m",
    icon="\033[38;5;110m",
    git_badge_modified="\033[38;5;214m",
    git_badge_added="\033[38;5;42m",
    git_badge_deleted="\033[38;5;203m",
    git_badge_untracked="\033[38;5;42m",
    git_badge_ignored="\033[2;38;5;245m",
    diagnostic_error="\033[38;5;203m",
    diagnostic_warning="\033[38;5;214m",
    diagnostic_info="\033[38;5;110m",
    status_error="\033[1;38;5;203m",
    status_info="\033[38;5;250m",
    prompt="\033[1;38;5;81m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    selection="\033[48;5;24m",
    icon="\033[38;5;117m",
    git_badge_modified="\033[38;5;215m",
    git_badge_added="\033[38;5;84m",
    git_badge_deleted="\033[38;5;210m",
    git_badge_untracked="\033[38;5;84m",
    git_badge_ignored="\033[2;38;5;110m",
    diagnostic_error="\033[38;5;210m",
    diagnostic_warning="\033[38;5;215m",
    diagnostic_info="\033[38;5;117m",
    status_error="\033[1;38;5;210m",
    status_info="\033[38;5;153m",
    prompt="\033[1;38;5;45m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="",
    reset="",
    header="",
    selection="",
    icon="",
    git_badge_modified="",
    git_badge_added="",
    git_badge_deleted="",
    git_badge_untracked="",
    git_badge_ignored="",
    diagnostic_error="",
    diagnostic_warning="",
    diagnostic_info="",
    status_error="",
    status_info="",
    prompt="",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
