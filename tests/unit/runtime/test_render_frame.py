"""Tests for listing row formatting and full-frame composition."""

from __future__ import annotations

import unittest

from lazydired.ansi import strip_ansi
from lazydired.diagnostics import AggregatedDiagnostic, Severity, TextRange
from lazydired.highlight import colorize_lines, sanitize_terminal_text
from lazydired.icons import DIRECTORY_ICON, icon_for
from lazydired.input import KeyComboBinding
from lazydired.listing import DirectoryEntry, EntryKind, Listing
from lazydired.navigation import Selection
from lazydired.runtime.render import (
    RenderOptions,
    build_frame,
    build_status_line,
    format_listing_rows,
    help_lines,
    render_plain_listing,
)
from lazydired.runtime.state import ViewState
from lazydired.ui_theme import DEFAULT_THEME, PLAIN_THEME

PLAIN = RenderOptions(theme=PLAIN_THEME, no_color=True)
COLOR = RenderOptions(theme=DEFAULT_THEME, style="monokai")


def _listing() -> Listing:
    entries = (DirectoryEntry("src", EntryKind.DIRECTORY), DirectoryEntry("a.py", EntryKind.FILE))
    return Listing(directory="/proj", lines=("../", "src/", "a.py"), entries=entries, has_parent=True)


def _annotation(line: int, count: int, severity: Severity) -> AggregatedDiagnostic:
    message = f"{count} problem" if count == 1 else f"{count} problems"
    return AggregatedDiagnostic(line, TextRange(line, 0, line, 3), severity, count, message, ())


class ListingRowTests(unittest.TestCase):
    def test_plain_rows_keep_line_text_after_gutter(self) -> None:
        rows = format_listing_rows(_listing(), PLAIN)

        self.assertEqual(rows, ["  ../", "  src/", "  a.py"])

    def test_badges_and_diagnostics_decorate_without_changing_name(self) -> None:
        rows = format_listing_rows(
            _listing(),
            PLAIN,
            badges={1: "M", 2: "U"},
            annotations={2: _annotation(2, 2, Severity.ERROR)},
        )

        self.assertEqual(rows[1], "M src/")
        self.assertEqual(rows[2], "U a.py  ● 2 problems")

    def test_icons_occupy_gutter_column(self) -> None:
        rows = format_listing_rows(_listing(), RenderOptions(theme=PLAIN_THEME, no_color=True, icons=True))

        self.assertEqual(rows[0], "    ../")
        self.assertEqual(rows[1], f"  {DIRECTORY_ICON} src/")
        self.assertEqual(rows[2], f"  {icon_for('a.py', False)} a.py")

    def test_colored_rows_strip_back_to_plain_rows(self) -> None:
        rows = format_listing_rows(_listing(), COLOR, badges={1: "M"})

        self.assertEqual([strip_ansi(row) for row in rows], ["  ../", "M src/", "  a.py"])

    def test_control_characters_in_names_are_escaped(self) -> None:
        listing = Listing("/proj", ("bad\x1b[2Jname",), (DirectoryEntry("bad\x1b[2Jname", EntryKind.FILE),), False)

        (row,) = format_listing_rows(listing, PLAIN)

        self.assertEqual(row, "  bad\\x1b[2Jname")
        self.assertEqual(sanitize_terminal_text("ok"), "ok")

    def test_colorize_lines_preserves_line_count(self) -> None:
        lines = ("../", "src/", ".env", "a.tar.gz", "Makefile")

        colored = colorize_lines(lines, "no-such-style")

        self.assertEqual([strip_ansi(line) for line in colored], list(lines))


class FrameTests(unittest.TestCase):
    def _state(self) -> ViewState:
        state = ViewState(listing=_listing(), view_active=True)
        state.cursor = 2
        return state

    def test_frame_has_header_listing_and_status_rows(self) -> None:
        frame = strip_ansi(build_frame(self._state(), PLAIN, 40, 6))
        rows = frame.split("\r\n")

        self.assertEqual(rows[0], "/proj")
        self.assertEqual(rows[1].rstrip(), "  ../")
        self.assertEqual(rows[3].rstrip(), "> a.py")
        self.assertEqual(len(rows), 6)
        self.assertTrue(rows[-1].startswith("3/3"))
        self.assertTrue(rows[-1].endswith("? Help"))

    def test_cursor_row_uses_reverse_video_with_color_theme(self) -> None:
        frame = build_frame(self._state(), COLOR, 40, 6)

        self.assertIn(DEFAULT_THEME.reverse, frame)

    def test_prompt_line_replaces_status(self) -> None:
        state = self._state()
        state.prompt_line = "Rename (Enter a new filename): a.py_"

        rows = strip_ansi(build_frame(state, PLAIN, 60, 6)).split("\r\n")

        self.assertEqual(rows[-1], "Rename (Enter a new filename): a.py_")

    def test_status_message_is_shown(self) -> None:
        state = self._state()
        state.status_message = "Not found: /proj/x"
        state.status_is_error = True

        rows = strip_ansi(build_frame(state, PLAIN, 60, 6)).split("\r\n")

        self.assertEqual(rows[-1], "Not found: /proj/x")

    def test_overlay_lists_items_with_selection_marker(self) -> None:
        state = self._state()
        state.overlay_title = "Jump to bookmark"
        state.overlay_lines = ["a  /alpha", "w  /work"]
        state.overlay_selected = 1

        rows = strip_ansi(build_frame(state, PLAIN, 40, 6)).split("\r\n")

        self.assertEqual(rows[1].rstrip(), "Jump to bookmark")
        self.assertEqual(rows[2].rstrip(), "  a  /alpha")
        self.assertEqual(rows[3].rstrip(), "> w  /work")

    def test_listing_scrolls_from_top_offset(self) -> None:
        state = self._state()
        state.top = 1

        rows = strip_ansi(build_frame(state, PLAIN, 40, 4)).split("\r\n")

        self.assertEqual([row.rstrip() for row in rows[1:3]], ["  src/", "> a.py"])

    def test_help_lists_binding_descriptions(self) -> None:
        state = self._state()
        state.show_help = True
        bindings = (KeyComboBinding(("R",), lambda: True, "rename"), KeyComboBinding(("x",), lambda: True))

        frame = strip_ansi(build_frame(state, PLAIN, 40, 10, bindings))

        self.assertIn("R  rename", frame)
        self.assertEqual(strip_ansi(help_lines(bindings, PLAIN_THEME)[0]), "KEYS")

    def test_visual_selection_rows_get_background(self) -> None:
        state = self._state()
        state.visual_anchor = 1
        state.extra_selections = [Selection.caret(0)]

        self.assertEqual(state.selected_line_indices(), {0, 1, 2})
        frame = build_frame(state, COLOR, 40, 6)
        self.assertEqual(frame.count(DEFAULT_THEME.selection), 2)


class PlainOutputTests(unittest.TestCase):
    def test_plain_listing_is_one_row_per_line(self) -> None:
        text = render_plain_listing(_listing(), PLAIN, badges={2: "M"})

        self.assertEqual(text, "  ../\n  src/\nM a.py\n")

    def test_status_line_right_aligns_help_hint(self) -> None:
        line = build_status_line("3/3", 20)

        self.assertEqual(len(line), 19)
        self.assertTrue(line.startswith("3/3"))
        self.assertTrue(line.endswith("│ ? Help"))


if __name__ == "__main__":
    unittest.main()
