from __future__ import annotations

import unittest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from pocketledger.application.finance_service import FinanceService
from pocketledger.domain.errors import DuplicateCategoryError, RecordNotFoundError
from pocketledger.domain.models import UNSET, TransactionType, Value
from pocketledger.infrastructure.stores.memory import InMemoryFinanceStore


class FinanceServiceTransactionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = FinanceService(InMemoryFinanceStore())

    def test_add_validates_and_coerces(self) -> None:
        txn = self.service.add_transaction(
            "u1",
            {"amount": "-45.20", "category": "  Groceries ", "date": "2026-03-02", "type": "expense"},
        )

        self.assertEqual(txn.amount, Decimal("-45.20"))
        self.assertEqual(txn.category, "Groceries")
        self.assertEqual(txn.date, date(2026, 3, 2))
        self.assertEqual(txn.type, TransactionType.EXPENSE)
        self.assertEqual(self.service.get_transaction("u1", txn.id), txn)

    def test_zero_amount_is_rejected_naming_the_field(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.service.add_transaction(
                "u1", {"amount": "0", "category": "Groceries", "date": "2026-03-02", "type": "expense"}
            )

        self.assertEqual(ctx.exception.errors()[0]["loc"], ("amount",))
        self.assertIsInstance(ctx.exception, ValueError)

    def test_missing_category_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.service.add_transaction(
                "u1", {"amount": "10", "category": "   ", "date": "2026-03-02", "type": "income"}
            )

    def test_edit_changes_only_given_fields(self) -> None:
        txn = self.service.add_transaction(
            "u1", {"amount": "-10", "category": "Dining Out", "date": "2026-03-02", "type": "expense", "notes": "lunch"}
        )

        edited = self.service.edit_transaction("u1", txn.id, {"amount": "-12"})

        self.assertEqual(edited.amount, Decimal("-12"))
        self.assertEqual(edited.category, "Dining Out")
        self.assertEqual(edited.notes, "lunch")

    def test_edit_rejects_null_for_required_fields(self) -> None:
        txn = self.service.add_transaction(
            "u1", {"amount": "-10", "category": "Dining Out", "date": "2026-03-02", "type": "expense", "notes": "lunch"}
        )

        for field in ("amount", "category", "date", "type"):
            with self.assertRaises(ValueError, msg=field):
                self.service.edit_transaction("u1", txn.id, {field: None})

        stored = self.service.get_transaction("u1", txn.id)
        self.assertEqual(stored.amount, Decimal("-10"))
        self.assertEqual(stored.date, date(2026, 3, 2))

    def test_edit_can_clear_notes(self) -> None:
        txn = self.service.add_transaction(
            "u1", {"amount": "-10", "category": "Dining Out", "date": "2026-03-02", "type": "expense", "notes": "lunch"}
        )

        self.assertIsNone(self.service.edit_transaction("u1", txn.id, {"notes": None}).notes)

    def test_edit_and_delete_unknown_id(self) -> None:
        with self.assertRaises(RecordNotFoundError):
            self.service.edit_transaction("u1", "nope", {"amount": "-1"})
        with self.assertRaises(RecordNotFoundError):
            self.service.delete_transaction("u1", "nope")

    def test_list_with_open_ended_range(self) -> None:
        for day in ("2026-01-15", "2026-02-15", "2026-03-15"):
            self.service.add_transaction("u1", {"amount": "-5", "category": "Misc", "date": day, "type": "expense"})

        since_feb = self.service.list_transactions("u1", start="2026-02-01")
        until_feb = self.service.list_transactions("u1", end=date(2026, 2, 28))

        self.assertEqual([t.date.month for t in since_feb], [3, 2])
        self.assertEqual([t.date.month for t in until_feb], [2, 1])


class FinanceServiceCategoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = FinanceService(InMemoryFinanceStore(seed_categories=False))

    def test_add_normalizes_color(self) -> None:
        category = self.service.add_category("u1", {"name": "Pets", "color": "#AABBCC", "type": "expense"})

        self.assertEqual(category.color, "#aabbcc")
        self.assertEqual([c.name for c in self.service.list_categories("u1", "expense")], ["Pets"])
        self.assertEqual(self.service.list_categories("u1", TransactionType.INCOME), [])

    def test_duplicate_name_is_rejected(self) -> None:
        self.service.add_category("u1", {"name": "Pets", "color": "#aabbcc", "type": "expense"})

        with self.assertRaises(DuplicateCategoryError):
            self.service.add_category("u1", {"name": "Pets", "color": "#112233", "type": "expense"})

    def test_rename_to_existing_name_is_rejected(self) -> None:
        self.service.add_category("u1", {"name": "Pets", "color": "#aabbcc", "type": "expense"})
        other = self.service.add_category("u1", {"name": "Kids", "color": "#112233", "type": "expense"})

        with self.assertRaises(DuplicateCategoryError):
            self.service.edit_category("u1", other.id, {"name": "Pets"})

        same = self.service.edit_category("u1", other.id, {"name": "Kids", "color": "#445566"})
        self.assertEqual(same.color, "#445566")

    def test_edit_rejects_null_name_color_or_type(self) -> None:
        category = self.service.add_category("u1", {"name": "Pets", "color": "#aabbcc", "type": "expense"})

        for field in ("name", "color", "type"):
            with self.assertRaises(ValueError, msg=field):
                self.service.edit_category("u1", category.id, {field: None})

        self.assertEqual([c.name for c in self.service.list_categories("u1")], ["Pets"])

    def test_bad_color_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.service.add_category("u1", {"name": "Pets", "color": "blue", "type": "expense"})

    def test_delete_keeps_transactions(self) -> None:
        category = self.service.add_category("u1", {"name": "Pets", "color": "#aabbcc", "type": "expense"})
        self.service.add_transaction("u1", {"amount": "-30", "category": "Pets", "date": "2026-03-02", "type": "expense"})

        self.service.delete_category("u1", category.id)

        self.assertEqual(self.service.list_categories("u1"), [])
        self.assertEqual(len(self.service.list_transactions("u1", category="Pets")), 1)


class FinanceServiceSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = FinanceService(InMemoryFinanceStore())

    def test_partial_update_leaves_other_fields(self) -> None:
        self.service.update_settings("u1", {"emergency_fund_goal": "6000", "saving_amount": "400"})
        settings = self.service.update_settings("u1", {"total_savings": "1500", "theme": "dark"})

        self.assertEqual(settings.targets.emergency_fund_goal, Value(Decimal("6000")))
        self.assertEqual(settings.targets.saving_amount, Value(Decimal("400")))
        self.assertEqual(settings.targets.total_savings, Decimal("1500"))
        self.assertEqual(settings.theme, "dark")
        self.assertEqual(self.service.get_settings("u1"), settings)

    def test_explicit_null_clears_a_target(self) -> None:
        self.service.update_settings("u1", {"saving_amount": "400"})

        settings = self.service.update_settings("u1", {"saving_amount": None})

        self.assertIs(settings.targets.saving_amount, UNSET)

    def test_zero_is_a_set_value(self) -> None:
        settings = self.service.update_settings("u1", {"emergency_fund_goal": 0})

        self.assertEqual(settings.targets.emergency_fund_goal, Value(Decimal("0")))

    def test_rejects_negative_and_null_required_values(self) -> None:
        with self.assertRaises(ValueError):
            self.service.update_settings("u1", {"emergency_fund_goal": "-1"})
        with self.assertRaises(ValueError):
            self.service.update_settings("u1", {"total_savings": None})
        with self.assertRaises(ValueError):
            self.service.update_settings("u1", {"theme": "neon"})


if __name__ == "__main__":
    unittest.main()
