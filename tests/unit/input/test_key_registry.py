"""Tests for key-combo dispatch tables."""

from __future__ import annotations

import unittest

from lazydired.input import KeyComboBinding, KeyComboRegistry


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_invokes_bound_handler(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_binding(
            KeyComboBinding(("ENTER", "l"), lambda: calls.append("open") or True, "open")
        )

        self.assertTrue(registry.dispatch("l"))
        self.assertTrue(registry.dispatch("ENTER"))
        self.assertEqual(calls, ["open", "open"])

    def test_unbound_key_returns_none(self) -> None:
        registry = KeyComboRegistry()

        self.assertIsNone(registry.dispatch("x"))

    def test_later_binding_overrides_same_combo(self) -> None:
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("r",), lambda: "first"),
            KeyComboBinding(("r",), lambda: "second"),
        )

        self.assertEqual(registry.dispatch("r"), "second")
        self.assertEqual(len(registry.bindings()), 2)

    def test_normalizer_applies_to_registration_and_dispatch(self) -> None:
        registry = KeyComboRegistry(normalize=str.lower).register_binding(KeyComboBinding(("Q",), lambda: True))

        self.assertTrue(registry.dispatch("q"))

    def test_bindings_keep_registration_order(self) -> None:
        first = KeyComboBinding(("a",), lambda: True, "first")
        second = KeyComboBinding(("b",), lambda: True, "second")

        registry = KeyComboRegistry().register_bindings(first, second)

        self.assertEqual(registry.bindings(), (first, second))


if __name__ == "__main__":
    unittest.main()
