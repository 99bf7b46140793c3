from __future__ import annotations

import logging
import time
import uuid
from calendar import month_name

from pocketledger.analytics.ledger import DEFAULT_SORT_DIRECTION, DEFAULT_SORT_FIELD
from pocketledger.application.tool_executor import ToolCall, ToolExecutor
from pocketledger.domain.schemas import MonthlyOverview, ToolContext

logger = logging.getLogger(__name__)


class DashboardService:
    """Builds the monthly overview from the registered ledger and target tools."""

    def __init__(self, tool_executor: ToolExecutor, currency: str = "USD"):
        self._tool_executor = tool_executor
        self._currency = currency

    def monthly_overview(
        self,
        user_id: str,
        year: int,
        month: int,
        sort: str = DEFAULT_SORT_FIELD,
        direction: str = DEFAULT_SORT_DIRECTION,
    ) -> MonthlyOverview:
        if month < 1 or month > 12:
            raise ValueError(f"month must be an integer from 1 to 12, got {month}")

        request_id = f"req_{uuid.uuid4().hex[:12]}"
        logger.info("Dashboard overview start request_id=%s user_id=%s month=%04d-%02d", request_id, user_id, year, month)
        t0 = time.perf_counter()

        month_args = {"year": year, "month_number": month}
        calls = [
            ToolCall(id="summary", tool="ledger.month_summary", args=month_args),
            ToolCall(id="ledger", tool="ledger.running_balance", args={**month_args, "sort": sort, "direction": direction}),
            ToolCall(id="daily_cashflow", tool="ledger.daily_cashflow", args=month_args),
            ToolCall(id="target", tool="target.emergency_fund", args=month_args),
        ]
        context = ToolContext(user_id=user_id, currency=self._currency)
        responses = self._tool_executor.run_calls(calls, context, request_id)

        sections = {}
        errors: list[str] = []
        for call, response in zip(calls, responses):
            if response.ok:
                sections[call.id] = response.result
            else:
                errors.extend(f"{response.tool}: {error}" for error in response.errors)

        logger.info(
            "Dashboard overview complete request_id=%s in %.2fs errors=%d",
            request_id,
            time.perf_counter() - t0,
            len(errors),
        )
        return MonthlyOverview(
            user_id=user_id,
            year=year,
            month=month,
            month_name=month_name[month],
            summary=sections.get("summary", {}),
            ledger=sections.get("ledger", {}),
            daily_cashflow=sections.get("daily_cashflow", {}),
            target=sections.get("target", {}),
            errors=errors,
        )
