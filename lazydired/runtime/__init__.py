"""Terminal host for the directory browser.

Groups the interactive bootstrap (`run_browser`), the view state, the editor
surface and prompt implementations, and frame rendering.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import browser entrypoint to avoid heavy runtime bootstrap on import."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


__all__ = ["run_browser"]
