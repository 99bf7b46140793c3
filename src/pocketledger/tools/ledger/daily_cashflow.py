from __future__ import annotations

from decimal import Decimal

from pocketledger.analytics.aggregator import daily_cash_flow
from pocketledger.domain.schemas import ToolRequest, ToolResponse
from pocketledger.tools._transactions_support import (
    ToolArgumentError,
    fetch_window,
    money,
    resolve_date_range,
    window_payload,
)
from pocketledger.tools.base import Tool, ToolSpec
from pocketledger.tools.registry import register_tool


@register_tool
class DailyCashflowTool(Tool):
    name = "ledger.daily_cashflow"
    description = "Per-day income, expenses and net cash flow for every day of the month (or `date_range`)."

    def run(self, request: ToolRequest) -> ToolResponse:
        try:
            window = resolve_date_range(request.args)
        except ToolArgumentError as exc:
            return self.fail(request, str(exc))

        days = daily_cash_flow(fetch_window(request, window), window)
        result = {
            "window": window_payload(window),
            "days": [
                {
                    "date": day.day.isoformat(),
                    "income": money(day.income),
                    "expenses": money(day.expenses),
                    "net": money(day.net),
                }
                for day in days
            ],
            "net_total": money(sum((day.net for day in days), Decimal("0"))),
        }
        return self.ok(request, result)

    def spec(self) -> ToolSpec:
        return ToolSpec(
            name=self.name,
            description=self.description,
            args_schema={
                "type": "object",
                "properties": {
                    "month_number": {"type": "integer", "minimum": 1, "maximum": 12},
                    "year": {"type": "integer"},
                    "date_range": {"type": "object"},
                },
            },
        )
