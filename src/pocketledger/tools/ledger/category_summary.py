from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Any, Iterable

from pocketledger.analytics.categories import color_of
from pocketledger.domain.models import Category, Transaction, TransactionType
from pocketledger.domain.schemas import ToolRequest, ToolResponse
from pocketledger.tools._transactions_support import (
    ToolArgumentError,
    fetch_categories,
    fetch_window,
    money,
    resolve_date_range,
    window_payload,
)
from pocketledger.tools.base import Tool, ToolSpec
from pocketledger.tools.registry import register_tool


def _build_category_summary(txns: Iterable[Transaction], categories: list[Category]) -> dict[str, Any]:
    groups: dict[str, dict[str, Any]] = defaultdict(
        lambda: {"txn_count": 0, "income_total": Decimal("0"), "expense_total": Decimal("0")}
    )

    for txn in txns:
        entry = groups[txn.category]
        entry["txn_count"] += 1
        if txn.type == TransactionType.INCOME:
            entry["income_total"] += txn.amount
        else:
            entry["expense_total"] += abs(txn.amount)

    rows = [
        {
            "category": name,
            "color": color_of(name, categories),
            "txn_count": entry["txn_count"],
            "income_total": money(entry["income_total"]),
            "expense_total": money(entry["expense_total"]),
            "net_total": money(entry["income_total"] - entry["expense_total"]),
        }
        for name, entry in groups.items()
    ]
    rows.sort(key=lambda x: x["income_total"] + x["expense_total"], reverse=True)
    return {
        "categories": rows,
        "category_count": len(rows),
        "total_income": money(sum((e["income_total"] for e in groups.values()), Decimal("0"))),
        "total_expenses": money(sum((e["expense_total"] for e in groups.values()), Decimal("0"))),
    }


@register_tool
class CategorySummaryTool(Tool):
    name = "ledger.category_summary"
    description = (
        "Summarize income/expense totals grouped by category for a `date_range` "
        "(defaults to the current month)."
    )

    def run(self, request: ToolRequest) -> ToolResponse:
        try:
            window = resolve_date_range(request.args)
        except ToolArgumentError as exc:
            return self.fail(request, str(exc))

        txns = fetch_window(request, window)
        result = _build_category_summary(txns, fetch_categories(request))
        result["window"] = window_payload(window)
        result["transaction_count"] = len(txns)
        return self.ok(request, result)

    def spec(self) -> ToolSpec:
        return ToolSpec(
            name=self.name,
            description=self.description,
            args_schema={
                "type": "object",
                "properties": {
                    "date_range": {
                        "type": "object",
                        "properties": {"start": {"type": "string"}, "end": {"type": "string"}},
                    },
                    "month_number": {"type": "integer", "minimum": 1, "maximum": 12},
                    "year": {"type": "integer"},
                },
            },
        )
