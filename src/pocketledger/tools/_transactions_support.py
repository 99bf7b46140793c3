from __future__ import annotations

from datetime import date
from decimal import ROUND_FLOOR, Decimal
from typing import Any

from pocketledger.analytics.categories import FALLBACK_COLOR
from pocketledger.analytics.period import month_window_for
from pocketledger.domain.models import Category, LedgerRow, Transaction
from pocketledger.domain.schemas import DateRange, ToolRequest, TransactionQuery
from pocketledger.infrastructure.get_transactions import get_transactions


class ToolArgumentError(ValueError):
    pass


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def money(value: Decimal) -> float:
    return round(float(value), 2)


def percent(value: Decimal) -> float:
    # Truncated so a shown 100.0 always means the goal is complete.
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_FLOOR))


def resolve_month(args: dict[str, Any], today: date | None = None) -> tuple[int, int]:
    """``(year, month)`` from tool args; each defaults to the current one."""
    today = today or date.today()
    raw_month = args.get("month_number", args.get("month"))
    month = _as_int(raw_month) if raw_month is not None else today.month
    year = _as_int(args.get("year")) if args.get("year") is not None else today.year
    if month is None or month < 1 or month > 12:
        raise ToolArgumentError("month_number must be an integer from 1 to 12")
    if year is None or year < 1 or year > 9999:
        raise ToolArgumentError("year must be a four-digit integer")
    return year, month


def resolve_date_range(args: dict[str, Any]) -> DateRange:
    raw = args.get("date_range")
    if isinstance(raw, DateRange):
        return raw
    if isinstance(raw, dict):
        try:
            return DateRange.model_validate(raw)
        except ValueError as exc:
            raise ToolArgumentError(f"Invalid date_range: {exc}") from exc
    if raw is not None:
        raise ToolArgumentError("date_range must be an object with start and end dates")
    year, month = resolve_month(args)
    return month_window_for(year, month)


def fetch_window(request: ToolRequest, window: DateRange) -> list[Transaction]:
    query = TransactionQuery(user_id=request.context.user_id, date_range=window)
    return get_transactions.fetch(query)


def fetch_categories(request: ToolRequest) -> list[Category]:
    return get_transactions.store.list_categories(request.context.user_id)


def window_payload(window: DateRange) -> dict[str, str]:
    return {"start": window.start.isoformat(), "end": window.end.isoformat()}


def ledger_row_payload(row: LedgerRow, colors: dict[str, str]) -> dict[str, Any]:
    """Serialized row; ``colors`` comes from ``color_map`` over the user's categories."""
    payload = get_transactions.serialize_transaction(row.transaction)
    payload["running_balance"] = money(row.running_balance)
    payload["color"] = colors.get(row.transaction.category, FALLBACK_COLOR)
    return payload
