"""Tests for create/rename/delete semantics driven by listing lines."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazydired.errors import BatchDeleteError, InvalidTargetError, NotFoundError
from lazydired.listing import ListingModel, LocalFilesystem
from lazydired.operations import CANCEL, DELETE, OVERWRITE, FileOperationEngine


class _ScriptedPrompts:
    """Answers every confirmation with ``answer`` and records the questions."""

    def __init__(self, answer: str | None = None) -> None:
        self.answer = answer
        self.confirmations: list[tuple[str, tuple[str, ...]]] = []

    def confirm(self, message: str, options) -> str | None:
        self.confirmations.append((message, tuple(options)))
        return self.answer


class _FailingDeleteFilesystem(LocalFilesystem):
    def __init__(self, failing: set[str]) -> None:
        self.failing = failing

    def delete(self, path: str, *, recursive: bool, recoverable: bool) -> None:
        if os.path.basename(path) in self.failing:
            raise NotFoundError(path, "simulated")
        super().delete(path, recursive=recursive, recoverable=recoverable)


class _OperationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(os.path.realpath(self._tmp.name))
        self.dir = str(self.root)
        self.fs = LocalFilesystem()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def engine(self, answer: str | None = None, fs: LocalFilesystem | None = None) -> tuple[FileOperationEngine, _ScriptedPrompts]:
        prompts = _ScriptedPrompts(answer)
        return FileOperationEngine(fs or self.fs, prompts, use_trash=False), prompts

    def lines(self) -> tuple[str, ...]:
        return ListingModel(self.fs).render(self.dir).lines


class CreateTests(_OperationTestCase):
    def test_create_file_reports_path_to_open(self) -> None:
        engine, _prompts = self.engine()

        result = engine.create(self.dir, "notes.md")

        self.assertTrue(result.changed)
        self.assertEqual(result.open_path, str(self.root / "notes.md"))
        self.assertEqual((self.root / "notes.md").read_bytes(), b"")

    def test_create_file_makes_missing_intermediate_directories(self) -> None:
        engine, _prompts = self.engine()

        result = engine.create(self.dir, "src/pkg/mod.py")

        self.assertTrue(result.changed)
        self.assertTrue((self.root / "src" / "pkg" / "mod.py").is_file())

    def test_create_trailing_slash_makes_directory_tree(self) -> None:
        engine, _prompts = self.engine()

        result = engine.create(self.dir, "x/y/z/")

        self.assertTrue(result.changed)
        self.assertIsNone(result.open_path)
        self.assertTrue((self.root / "x" / "y" / "z").is_dir())

    def test_create_never_overwrites_existing_path(self) -> None:
        (self.root / "keep.txt").write_text("data", encoding="utf-8")
        engine, _prompts = self.engine()

        result = engine.create(self.dir, "keep.txt")

        self.assertFalse(result.changed)
        self.assertEqual((self.root / "keep.txt").read_text(encoding="utf-8"), "data")

    def test_create_with_empty_or_cancelled_name_is_noop(self) -> None:
        engine, _prompts = self.engine()

        self.assertFalse(engine.create(self.dir, "").changed)
        self.assertFalse(engine.create(self.dir, None).changed)
        self.assertEqual(os.listdir(self.root), [])

    def test_create_directory_ignores_trailing_slash_and_makes_parents(self) -> None:
        engine, _prompts = self.engine()

        self.assertTrue(engine.create_directory(self.dir, "a/b").changed)
        self.assertTrue(engine.create_directory(self.dir, "c/").changed)
        self.assertFalse(engine.create_directory(self.dir, "a/b").changed)

        self.assertTrue((self.root / "a" / "b").is_dir())
        self.assertTrue((self.root / "c").is_dir())


class RenameTests(_OperationTestCase):
    def test_rename_into_new_nested_path_creates_parents(self) -> None:
        (self.root / "a.txt").write_text("a", encoding="utf-8")
        engine, prompts = self.engine()

        result = engine.rename(self.dir, "a.txt", "b/c.txt")

        self.assertTrue(result.changed)
        self.assertFalse((self.root / "a.txt").exists())
        self.assertTrue((self.root / "b" / "c.txt").is_file())
        self.assertEqual(self.lines(), ("../", "b/"))
        self.assertEqual(prompts.confirmations, [])

    def test_rename_onto_existing_directory_moves_inside(self) -> None:
        (self.root / "a.txt").write_text("a", encoding="utf-8")
        (self.root / "b").mkdir()
        engine, _prompts = self.engine()

        result = engine.rename(self.dir, "a.txt", "b/")

        self.assertTrue(result.changed)
        self.assertTrue((self.root / "b" / "a.txt").is_file())
        self.assertEqual(self.lines(), ("../", "b/"))

    def test_rename_fails_when_relocated_target_is_directory(self) -> None:
        (self.root / "a").mkdir()
        (self.root / "b" / "a").mkdir(parents=True)
        engine, _prompts = self.engine()

        with self.assertRaises(InvalidTargetError):
            engine.rename(self.dir, "a/", "b")

        self.assertTrue((self.root / "a").is_dir())
        self.assertTrue((self.root / "b" / "a").is_dir())

    def test_rename_onto_existing_file_asks_before_overwriting(self) -> None:
        (self.root / "a.txt").write_text("new", encoding="utf-8")
        (self.root / "b.txt").write_text("old", encoding="utf-8")
        engine, prompts = self.engine(OVERWRITE)

        result = engine.rename(self.dir, "a.txt", "b.txt")

        self.assertTrue(result.changed)
        self.assertEqual(prompts.confirmations, [("Overwrite existing file?", (CANCEL, OVERWRITE))])
        self.assertEqual((self.root / "b.txt").read_text(encoding="utf-8"), "new")
        self.assertFalse((self.root / "a.txt").exists())

    def test_rename_declined_overwrite_leaves_both_files(self) -> None:
        (self.root / "a.txt").write_text("new", encoding="utf-8")
        (self.root / "b.txt").write_text("old", encoding="utf-8")

        for answer in (CANCEL, None):
            engine, _prompts = self.engine(answer)
            result = engine.rename(self.dir, "a.txt", "b.txt")
            self.assertFalse(result.changed)

        self.assertEqual((self.root / "a.txt").read_text(encoding="utf-8"), "new")
        self.assertEqual((self.root / "b.txt").read_text(encoding="utf-8"), "old")

    def test_rename_cancelled_or_unchanged_is_noop(self) -> None:
        (self.root / "a.txt").write_text("a", encoding="utf-8")
        (self.root / "d").mkdir()
        engine, prompts = self.engine()

        self.assertFalse(engine.rename(self.dir, "a.txt", None).changed)
        self.assertFalse(engine.rename(self.dir, "a.txt", "").changed)
        self.assertFalse(engine.rename(self.dir, "a.txt", "a.txt").changed)
        self.assertFalse(engine.rename(self.dir, "d/", "d/").changed)
        self.assertFalse(engine.rename(self.dir, "d/", "d").changed)
        self.assertFalse(engine.rename(self.dir, "../", "x").changed)
        self.assertEqual(prompts.confirmations, [])
        self.assertTrue((self.root / "a.txt").exists())
        self.assertEqual(sorted(os.listdir(self.root)), ["a.txt", "d"])
        self.assertEqual(os.listdir(self.root / "d"), [])

    def test_rename_missing_source_raises_not_found(self) -> None:
        engine, _prompts = self.engine()

        with self.assertRaises(NotFoundError):
            engine.rename(self.dir, "ghost.txt", "other.txt")

    def test_rename_of_vanished_source_creates_no_directories(self) -> None:
        engine, _prompts = self.engine()

        with self.assertRaises(NotFoundError):
            engine.rename(self.dir, "gone.txt", "new/deep/gone.txt")

        self.assertEqual(os.listdir(self.root), [])


class DeleteTests(_OperationTestCase):
    def setUp(self) -> None:
        super().setUp()
        (self.root / "a").mkdir()
        (self.root / "a" / "inner.txt").write_text("", encoding="utf-8")
        (self.root / "b.txt").write_text("", encoding="utf-8")

    def test_batch_delete_confirmed_removes_all(self) -> None:
        engine, prompts = self.engine(DELETE)

        result = engine.delete(self.dir, ["a/", "b.txt"])

        self.assertTrue(result.changed)
        self.assertEqual(prompts.confirmations, [("Delete 2 files?", (CANCEL, DELETE))])
        self.assertEqual(os.listdir(self.root), [])

    def test_batch_delete_declined_leaves_everything(self) -> None:
        engine, _prompts = self.engine(CANCEL)

        result = engine.delete(self.dir, ["a/", "b.txt"])

        self.assertFalse(result.changed)
        self.assertTrue((self.root / "a" / "inner.txt").exists())
        self.assertTrue((self.root / "b.txt").exists())

    def test_single_delete_message_names_the_entry(self) -> None:
        engine, prompts = self.engine(CANCEL)

        engine.delete(self.dir, ["b.txt"])
        engine.delete(self.dir, ["a/"])

        self.assertEqual(
            [message for message, _options in prompts.confirmations],
            ["Delete b.txt?", "Delete non-empty directory a?"],
        )

    def test_parent_sentinel_is_never_deleted(self) -> None:
        engine, prompts = self.engine(DELETE)

        result = engine.delete(self.dir, ["../"])

        self.assertFalse(result.changed)
        self.assertEqual(prompts.confirmations, [])

        engine.delete(self.dir, ["../", "b.txt"])
        self.assertEqual(prompts.confirmations[-1][0], "Delete b.txt?")
        self.assertTrue(self.root.exists())
        self.assertTrue((self.root / "a").exists())

    def test_duplicate_lines_are_deleted_once(self) -> None:
        engine, prompts = self.engine(DELETE)

        engine.delete(self.dir, ["b.txt", "b.txt"])

        self.assertEqual(prompts.confirmations[0][0], "Delete b.txt?")
        self.assertFalse((self.root / "b.txt").exists())

    def test_failed_items_do_not_stop_the_batch(self) -> None:
        engine, _prompts = self.engine(DELETE, fs=_FailingDeleteFilesystem({"a"}))

        with self.assertRaises(BatchDeleteError) as ctx:
            engine.delete(self.dir, ["a/", "b.txt"])

        self.assertEqual(ctx.exception.deleted, 1)
        self.assertEqual(len(ctx.exception.failures), 1)
        self.assertEqual(ctx.exception.failures[0][0], str(self.root / "a"))
        self.assertTrue((self.root / "a").exists())
        self.assertFalse((self.root / "b.txt").exists())

    def test_batch_error_message_aggregates_multiple_failures(self) -> None:
        engine, _prompts = self.engine(DELETE, fs=_FailingDeleteFilesystem({"a", "b.txt"}))

        with self.assertRaises(BatchDeleteError) as ctx:
            engine.delete(self.dir, ["a/", "b.txt"])

        self.assertTrue(str(ctx.exception).startswith("Failed to delete 2 of 2 items"))


if __name__ == "__main__":
    unittest.main()
