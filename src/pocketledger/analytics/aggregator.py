from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable

from pocketledger.analytics.categories import OTHER_CATEGORY
from pocketledger.domain.models import (
    Category,
    CategoryTotal,
    DailyCashFlow,
    PeriodSummary,
    Transaction,
    TransactionType,
)
from pocketledger.domain.schemas import DateRange

TOP_CATEGORY_LIMIT = 5


def in_window(transactions: Iterable[Transaction], window: DateRange) -> list[Transaction]:
    return [txn for txn in transactions if window.contains(txn.date)]


def summarize(
    transactions: Iterable[Transaction],
    window: DateRange,
    categories: Iterable[Category] | None = None,
) -> PeriodSummary:
    """
    Income/expense totals and the expense breakdown for one window.

    Income is a straight sum of the stored amounts. Expenses count with their
    absolute value whatever sign they were stored with, so ``total_expenses``
    is never negative. When ``categories`` is given, expenses whose category
    name matches none of them are grouped under "Other".
    """
    known = {c.name for c in categories} if categories is not None else None
    summary = PeriodSummary(start=window.start, end=window.end)
    breakdown: dict[str, Decimal] = defaultdict(Decimal)
    counts: Counter[str] = Counter()

    for txn in in_window(transactions, window):
        if txn.type == TransactionType.INCOME:
            summary.total_income += txn.amount
            summary.income_count += 1
            continue

        amount = abs(txn.amount)
        summary.total_expenses += amount
        summary.expense_count += 1
        name = txn.category
        if known is not None and name not in known:
            name = OTHER_CATEGORY
        breakdown[name] += amount
        counts[name] += 1

    summary.net_balance = summary.total_income - summary.total_expenses
    summary.category_breakdown = dict(breakdown)
    summary.category_counts = dict(counts)
    return summary


def top_categories(summary: PeriodSummary, limit: int = TOP_CATEGORY_LIMIT) -> list[CategoryTotal]:
    # sorted() is stable, so equal amounts keep first-seen order.
    ranked = sorted(summary.category_breakdown.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryTotal(category=name, amount=amount, count=summary.category_counts.get(name, 0))
        for name, amount in ranked[:limit]
    ]


def daily_cash_flow(transactions: Iterable[Transaction], window: DateRange) -> list[DailyCashFlow]:
    """One entry per calendar day of ``window``, including days with no activity."""
    income: dict[date, Decimal] = defaultdict(Decimal)
    expenses: dict[date, Decimal] = defaultdict(Decimal)
    for txn in in_window(transactions, window):
        if txn.type == TransactionType.INCOME:
            income[txn.date] += txn.amount
        else:
            expenses[txn.date] += abs(txn.amount)

    return [DailyCashFlow(day=day, income=income[day], expenses=expenses[day]) for day in window.days()]
