"""Editor launch helper for opening files from the directory view.

Runs ``$VISUAL``/``$EDITOR`` while temporarily leaving raw/alternate-screen TUI
mode. Returns an error message string instead of raising for UI-friendly
handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import Callable

_LOGGER = logging.getLogger(__name__)


def editor_command() -> list[str] | None:
    for variable in ("VISUAL", "EDITOR"):
        value = os.environ.get(variable, "").strip()
        if value:
            cmd = shlex.split(value)
            if cmd:
                return cmd
    return None


def launch_editor(
    target: str,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    cmd = editor_command()
    if cmd is None:
        return "Cannot open file: $EDITOR is not set."

    disable_tui_mode()
    try:
        subprocess.run([*cmd, target], check=False)
    except OSError as exc:
        _LOGGER.warning("editor launch failed for %s: %s", target, exc)
        return f"Failed to launch editor: {exc}"
    finally:
        enable_tui_mode()
    return None


__all__ = ["editor_command", "launch_editor"]
