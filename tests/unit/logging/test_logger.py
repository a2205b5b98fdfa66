"""Tests for file logging setup."""

from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydired.logger import LOG_LEVEL_ENV, resolve_log_level, setup_logging


class LoggerTests(unittest.TestCase):
    def test_debug_flag_selects_debug_level(self) -> None:
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: ""}):
            self.assertEqual(resolve_log_level(0), logging.INFO)
            self.assertEqual(resolve_log_level(2), logging.DEBUG)

    def test_environment_level_wins(self) -> None:
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: " warn "}):
            self.assertEqual(resolve_log_level(1), logging.WARNING)

    def test_unknown_environment_level_is_ignored(self) -> None:
        with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: "chatty"}):
            self.assertEqual(resolve_log_level(0), logging.INFO)

    def test_setup_logging_writes_package_records_to_file(self) -> None:
        package_logger = logging.getLogger("lazydired")
        original_handlers = list(package_logger.handlers)
        original_level = package_logger.level
        original_propagate = package_logger.propagate
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "lazydired.log"
            try:
                with mock.patch.dict(os.environ, {LOG_LEVEL_ENV: ""}):
                    self.assertEqual(setup_logging(1, log_file), log_file)
                logging.getLogger("lazydired.session").debug("hello from session")
                for handler in package_logger.handlers:
                    handler.flush()
                text = log_file.read_text(encoding="utf-8")
            finally:
                for handler in list(package_logger.handlers):
                    if handler not in original_handlers:
                        package_logger.removeHandler(handler)
                        handler.close()
                package_logger.setLevel(original_level)
                package_logger.propagate = original_propagate

        self.assertIn("DEBUG [lazydired.session] hello from session", text)

    def test_setup_logging_returns_none_when_directory_is_unwritable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")

            self.assertIsNone(setup_logging(0, blocker / "sub" / "x.log"))


if __name__ == "__main__":
    unittest.main()
