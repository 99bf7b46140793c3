from __future__ import annotations

from typing import Iterable

from pocketledger.domain.models import Category, TransactionType

FALLBACK_COLOR = "#6b7280"
OTHER_CATEGORY = "Other"

# Palette every new user starts with.
DEFAULT_CATEGORIES: tuple[tuple[str, str, TransactionType], ...] = (
    ("Salary", "#10b981", TransactionType.INCOME),
    ("Investments", "#06b6d4", TransactionType.INCOME),
    ("Freelance", "#8b5cf6", TransactionType.INCOME),
    ("Bonus", "#f59e0b", TransactionType.INCOME),
    ("Other Income", "#64748b", TransactionType.INCOME),
    ("Housing", "#ef4444", TransactionType.EXPENSE),
    ("Utilities", "#f97316", TransactionType.EXPENSE),
    ("Groceries", "#22c55e", TransactionType.EXPENSE),
    ("Transportation", "#3b82f6", TransactionType.EXPENSE),
    ("Entertainment", "#ec4899", TransactionType.EXPENSE),
    ("Healthcare", "#8b5cf6", TransactionType.EXPENSE),
    ("Insurance", "#64748b", TransactionType.EXPENSE),
    ("Savings", "#0ea5e9", TransactionType.EXPENSE),
    ("Dining Out", "#f43f5e", TransactionType.EXPENSE),
    ("Shopping", "#a855f7", TransactionType.EXPENSE),
    ("Education", "#0d9488", TransactionType.EXPENSE),
    ("Debt Payment", "#dc2626", TransactionType.EXPENSE),
    ("Other Expenses", "#71717a", TransactionType.EXPENSE),
)


def find_category(name: str, categories: Iterable[Category]) -> Category | None:
    for category in categories:
        if category.name == name:
            return category
    return None


def color_of(category_name: str, categories: Iterable[Category]) -> str:
    """
    Display colour for a category name.

    Transactions can outlive the category they reference (rename, delete),
    so an unmatched name resolves to ``FALLBACK_COLOR`` instead of failing.
    """
    category = find_category(category_name, categories)
    return category.color if category is not None else FALLBACK_COLOR


def color_map(categories: Iterable[Category]) -> dict[str, str]:
    colors: dict[str, str] = {}
    for category in categories:
        colors.setdefault(category.name, category.color)
    return colors
