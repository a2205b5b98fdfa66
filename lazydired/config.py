"""Persistent JSON config helpers.

Stores browser preferences and the bookmark table.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from .workspace import DEFAULT_WORKSPACE_MARKERS

_LOGGER = logging.getLogger(__name__)

APP_NAME = "lazydired"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / "lazydired.json"
CONFIG_PATH = DEFAULT_CONFIG_PATH


def _load_config_path() -> Path:
    """Return preferred config path, falling back to legacy location when needed."""
    if CONFIG_PATH.exists():
        return CONFIG_PATH
    if CONFIG_PATH == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = _load_config_path()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        _LOGGER.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored so a read-only config
    location never breaks the browser.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        _LOGGER.warning("could not write config %s: %s", CONFIG_PATH, exc)


class ConfigStore:
    """``KeyValueStore`` view over the JSON config file.

    Every ``get`` re-reads the file so edits from other sessions are picked up.
    """

    def get(self, key: str, default: object = None) -> object:
        return load_config().get(key, default)

    def set(self, key: str, value: object) -> None:
        config = load_config()
        config[key] = value
        save_config(config)


class MemoryStore:
    """In-process ``KeyValueStore`` used when persistence is disabled."""

    def __init__(self, initial: dict[str, object] | None = None) -> None:
        self.data: dict[str, object] = dict(initial or {})

    def get(self, key: str, default: object = None) -> object:
        return self.data.get(key, default)

    def set(self, key: str, value: object) -> None:
        self.data[key] = value


@dataclass(frozen=True)
class DiredSettings:
    """Validated snapshot of scalar preferences."""

    show_hidden: bool = True
    use_trash: bool = True
    nerd_font_icons: bool = False
    git_status: bool = True
    theme: str | None = None
    style: str = "monokai"
    workspace_markers: tuple[str, ...] = DEFAULT_WORKSPACE_MARKERS

    def with_overrides(self, **overrides: object) -> DiredSettings:
        """Return a copy with non-``None`` overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _optional_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _markers(value: object) -> tuple[str, ...]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return DEFAULT_WORKSPACE_MARKERS
    markers = tuple(item for item in value if isinstance(item, str) and item)
    return markers or DEFAULT_WORKSPACE_MARKERS


def load_settings() -> DiredSettings:
    """Load preferences, coercing invalid values to defaults."""
    data = load_config()
    defaults = DiredSettings()
    return DiredSettings(
        show_hidden=_bool(data, "show_hidden", defaults.show_hidden),
        use_trash=_bool(data, "use_trash", defaults.use_trash),
        nerd_font_icons=_bool(data, "nerd_font_icons", defaults.nerd_font_icons),
        git_status=_bool(data, "git_status", defaults.git_status),
        theme=_optional_str(data.get("theme")),
        style=_optional_str(data.get("style")) or defaults.style,
        workspace_markers=_markers(data.get("workspace_markers")),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "ConfigStore",
    "MemoryStore",
    "DiredSettings",
    "load_config",
    "save_config",
    "load_settings",
]
