from __future__ import annotations

import unittest

from pocketledger.analytics.categories import DEFAULT_CATEGORIES, FALLBACK_COLOR, color_map, color_of
from pocketledger.domain.models import Category, TransactionType


class ColorOfTests(unittest.TestCase):
    def setUp(self) -> None:
        self.categories = [
            Category(id="c1", name="Food", color="#22c55e", type=TransactionType.EXPENSE),
            Category(id="c2", name="Salary", color="#10b981", type=TransactionType.INCOME),
        ]

    def test_returns_matching_color(self) -> None:
        self.assertEqual(color_of("Food", self.categories), "#22c55e")
        self.assertEqual(color_of("Salary", self.categories), "#10b981")

    def test_unknown_name_falls_back(self) -> None:
        self.assertEqual(color_of("Nonexistent", self.categories), FALLBACK_COLOR)
        self.assertEqual(color_of("Nonexistent", []), FALLBACK_COLOR)

    def test_match_is_case_sensitive(self) -> None:
        self.assertEqual(color_of("food", self.categories), FALLBACK_COLOR)

    def test_color_map_keeps_first_entry_per_name(self) -> None:
        categories = self.categories + [Category(id="c3", name="Food", color="#000000")]

        self.assertEqual(color_map(categories)["Food"], "#22c55e")

    def test_default_palette_has_unique_names(self) -> None:
        names = [name for name, _, _ in DEFAULT_CATEGORIES]

        self.assertEqual(len(names), len(set(names)))


if __name__ == "__main__":
    unittest.main()
