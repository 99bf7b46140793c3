from __future__ import annotations

from calendar import month_name

from pocketledger.analytics.categories import color_map
from pocketledger.analytics.ledger import DEFAULT_SORT_DIRECTION, DEFAULT_SORT_FIELD, project, sort_transactions
from pocketledger.analytics.period import month_window_for
from pocketledger.domain.schemas import ToolRequest, ToolResponse
from pocketledger.tools._transactions_support import (
    fetch_categories,
    fetch_window,
    ledger_row_payload,
    money,
    resolve_month,
    window_payload,
)
from pocketledger.tools.base import Tool, ToolSpec
from pocketledger.tools.registry import register_tool


@register_tool
class RunningBalanceTool(Tool):
    name = "ledger.running_balance"
    description = (
        "Monthly ledger rows with a running balance. Optional `sort` (date, amount, category) "
        "and `direction` (asc, desc); defaults to newest first."
    )

    def run(self, request: ToolRequest) -> ToolResponse:
        args = request.args
        sort_field = str(args.get("sort") or DEFAULT_SORT_FIELD)
        direction = str(args.get("direction") or DEFAULT_SORT_DIRECTION)
        try:
            year, month_number = resolve_month(args)
            window = month_window_for(year, month_number)
            ordered = sort_transactions(fetch_window(request, window), sort_field, direction)
        except ValueError as exc:
            return self.fail(request, str(exc))

        rows = project(ordered)
        colors = color_map(fetch_categories(request))
        result = {
            "year": year,
            "month_number": month_number,
            "month_name": month_name[month_number],
            "window": window_payload(window),
            "sort": sort_field,
            "direction": direction,
            "rows": [ledger_row_payload(row, colors) for row in rows],
            "closing_balance": money(rows[-1].running_balance) if rows else 0.0,
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
                    "sort": {"type": "string", "enum": ["date", "amount", "category"]},
                    "direction": {"type": "string", "enum": ["asc", "desc"]},
                },
            },
        )
