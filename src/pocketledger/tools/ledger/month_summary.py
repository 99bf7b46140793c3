from __future__ import annotations

from calendar import month_name
from typing import Any

from pocketledger.analytics.aggregator import summarize, top_categories
from pocketledger.analytics.categories import color_of
from pocketledger.analytics.period import month_window_for
from pocketledger.domain.models import PeriodSummary
from pocketledger.domain.schemas import ToolRequest, ToolResponse
from pocketledger.tools._transactions_support import (
    ToolArgumentError,
    fetch_categories,
    fetch_window,
    money,
    resolve_month,
    window_payload,
)
from pocketledger.tools.base import Tool, ToolSpec
from pocketledger.tools.registry import register_tool


def summary_payload(summary: PeriodSummary) -> dict[str, Any]:
    return {
        "total_income": money(summary.total_income),
        "total_expenses": money(summary.total_expenses),
        "net_balance": money(summary.net_balance),
        "category_breakdown": {name: money(amount) for name, amount in summary.category_breakdown.items()},
        "transaction_count": summary.transaction_count,
        "income_count": summary.income_count,
        "expense_count": summary.expense_count,
    }


@register_tool
class MonthSummaryTool(Tool):
    name = "ledger.month_summary"
    description = (
        "Summarize monthly income/expense totals, net balance and top expense categories. "
        "Takes `month_number` (1-12); optional `year` defaults to current year."
    )

    def run(self, request: ToolRequest) -> ToolResponse:
        try:
            year, month_number = resolve_month(request.args)
        except ToolArgumentError as exc:
            return self.fail(request, str(exc))

        window = month_window_for(year, month_number)
        categories = fetch_categories(request)
        summary = summarize(fetch_window(request, window), window, categories=categories)

        result = {
            "year": year,
            "month_number": month_number,
            "month_name": month_name[month_number],
            "window": window_payload(window),
            **summary_payload(summary),
            "top_categories": [
                {
                    "category": total.category,
                    "amount": money(total.amount),
                    "count": total.count,
                    "color": color_of(total.category, categories),
                }
                for total in top_categories(summary)
            ],
        }
        return self.ok(request, result)

    def spec(self) -> ToolSpec:
        return ToolSpec(
            name=self.name,
            description=self.description,
            args_schema={
                "type": "object",
                "properties": {
                    "month_number": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 12,
                        "description": "Calendar month number to summarize (1=Jan ... 12=Dec).",
                    },
                    "year": {
                        "type": "integer",
                        "description": "Four-digit year for the monthly summary. Defaults to current year.",
                    },
                },
            },
        )
