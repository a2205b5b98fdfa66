"""Tests for the JSON config layer and the typed settings snapshot."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydired import config
from lazydired.workspace import DEFAULT_WORKSPACE_MARKERS


class ConfigFileTests(unittest.TestCase):
    def test_missing_file_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazydired.config.CONFIG_PATH", Path(tmp) / "config.json"):
                self.assertEqual(config.load_config(), {})

    def test_malformed_or_non_object_file_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                config_path.write_text("{broken", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_save_config_writes_pretty_json_and_creates_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                config.save_config({"theme": "ocean"})

                text = config_path.read_text(encoding="utf-8")
        self.assertEqual(json.loads(text), {"theme": "ocean"})
        self.assertIn("\n  ", text)

    def test_config_store_reads_through_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                store = config.ConfigStore()
                store.set("bookmarks", {"w": "/proj"})
                config_path.write_text(json.dumps({"bookmarks": {"x": "/x"}, "style": "zenburn"}), encoding="utf-8")

                self.assertEqual(store.get("bookmarks"), {"x": "/x"})
                self.assertEqual(store.get("missing", 5), 5)

                store.set("bookmarks", {})
                self.assertEqual(config.load_config()["style"], "zenburn")

class SettingsTests(unittest.TestCase):
    def _load(self, data: object) -> config.DiredSettings:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(json.dumps(data), encoding="utf-8")
            with mock.patch("lazydired.config.CONFIG_PATH", config_path):
                return config.load_settings()

    def test_defaults_when_config_is_empty(self) -> None:
        settings = self._load({})

        self.assertTrue(settings.show_hidden)
        self.assertTrue(settings.use_trash)
        self.assertFalse(settings.nerd_font_icons)
        self.assertTrue(settings.git_status)
        self.assertIsNone(settings.theme)
        self.assertEqual(settings.style, "monokai")
        self.assertEqual(settings.workspace_markers, DEFAULT_WORKSPACE_MARKERS)

    def test_valid_values_are_read(self) -> None:
        settings = self._load(
            {
                "show_hidden": False,
                "use_trash": False,
                "nerd_font_icons": True,
                "git_status": False,
                "theme": "ocean",
                "style": "zenburn",
                "workspace_markers": ["Cargo.toml", ""],
            }
        )

        self.assertFalse(settings.show_hidden)
        self.assertFalse(settings.use_trash)
        self.assertTrue(settings.nerd_font_icons)
        self.assertFalse(settings.git_status)
        self.assertEqual(settings.theme, "ocean")
        self.assertEqual(settings.style, "zenburn")
        self.assertEqual(settings.workspace_markers, ("Cargo.toml",))

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        settings = self._load(
            {"show_hidden": "no", "use_trash": 0, "style": "  ", "theme": 4, "workspace_markers": "x"}
        )

        self.assertEqual(settings, config.DiredSettings())

    def test_with_overrides_skips_none_values(self) -> None:
        base = config.DiredSettings(style="zenburn")

        updated = base.with_overrides(show_hidden=False, style=None, use_trash=None)

        self.assertFalse(updated.show_hidden)
        self.assertEqual(updated.style, "zenburn")
        self.assertTrue(updated.use_trash)


if __name__ == "__main__":
    unittest.main()
