"""Logging setup for the browser.

The terminal UI owns the screen, so records go to a rotating file under the
platform log directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

_LOGGER = logging.getLogger(__name__)

APP_NAME = "lazydired"
LOG_FILENAME = "lazydired.log"
LOG_LEVEL_ENV = "LAZYDIRED_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVEL_NAMES = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def resolve_log_level(debug_level: int) -> int:
    """Pick the package log level; ``LAZYDIRED_LOG_LEVEL`` wins over ``-v``."""
    env_level = _LEVEL_NAMES.get(os.environ.get(LOG_LEVEL_ENV, "").strip().upper())
    if env_level is not None:
        return env_level
    return logging.DEBUG if debug_level > 0 else logging.INFO


def setup_logging(debug_level: int = 0, log_file: Path | None = None) -> Path | None:
    """Attach a rotating file handler to the package logger.

    Returns the log path, or ``None`` when the log directory is not writable.
    """
    path = log_file if log_file is not None else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            str(path),
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
    except OSError:
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(resolve_log_level(debug_level))
    package_logger.addHandler(handler)
    package_logger.propagate = False
    _LOGGER.debug("file logging enabled at %s", path)
    return path


__all__ = ["default_log_path", "resolve_log_level", "setup_logging"]
