from __future__ import annotations

from typing import Any

from pocketledger.analytics.aggregator import summarize
from pocketledger.analytics.period import month_window_for
from pocketledger.analytics.targets import (
    STATUS_MESSAGES,
    ContributionPolicy,
    progress_tone,
    recommendations,
    track_emergency_fund,
)
from pocketledger.domain.models import TargetAmount, Value
from pocketledger.domain.schemas import ToolRequest, ToolResponse
from pocketledger.infrastructure.get_transactions import get_transactions
from pocketledger.tools._transactions_support import (
    ToolArgumentError,
    fetch_window,
    money,
    percent,
    resolve_month,
)
from pocketledger.tools.base import Tool, ToolSpec
from pocketledger.tools.registry import register_tool


def _target_value(value: TargetAmount) -> float | None:
    return money(value.amount) if isinstance(value, Value) else None


@register_tool
class EmergencyFundTool(Tool):
    name = "target.emergency_fund"
    description = (
        "Emergency-fund progress: amount still needed, percent complete and months to goal. "
        "The monthly contribution is the user's saving amount, or the month's net balance when unset."
    )

    def run(self, request: ToolRequest) -> ToolResponse:
        args = request.args
        try:
            year, month_number = resolve_month(args)
            policy = ContributionPolicy(args.get("contribution_policy") or ContributionPolicy.NET_BALANCE)
        except ToolArgumentError as exc:
            return self.fail(request, str(exc))
        except ValueError:
            return self.fail(
                request,
                f"contribution_policy must be one of {[p.value for p in ContributionPolicy]}",
            )

        window = month_window_for(year, month_number)
        summary = summarize(fetch_window(request, window), window)
        settings = get_transactions.store.get_settings(request.context.user_id)
        targets = settings.targets
        progress = track_emergency_fund(targets, summary.net_balance, policy)

        result: dict[str, Any] = {
            "year": year,
            "month_number": month_number,
            "goal": money(progress.goal),
            "goal_set": isinstance(targets.emergency_fund_goal, Value),
            "current_balance": money(progress.current_balance),
            "monthly_contribution": money(progress.monthly_contribution),
            "contribution_source": "saving_amount" if isinstance(targets.saving_amount, Value) else policy.value,
            "monthly_income_target": _target_value(targets.monthly_income_target),
            "amount_needed": money(progress.amount_needed),
            "percent_complete": percent(progress.percent_complete),
            "months_to_goal": progress.months_to_goal,
            "status": progress.status.value,
            "status_message": STATUS_MESSAGES[progress.status],
            "tone": progress_tone(progress.percent_complete),
            "recommendations": recommendations(progress),
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
                    "contribution_policy": {
                        "type": "string",
                        "enum": [p.value for p in ContributionPolicy],
                        "description": "Fallback when no saving amount is set.",
                    },
                },
            },
        )
