from __future__ import annotations

from decimal import ROUND_CEILING, Decimal
from enum import Enum

from pocketledger.domain.models import (
    ProgressStatus,
    TargetAmount,
    TargetParameters,
    TargetProgress,
    Value,
    amount_or,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Lower bound (inclusive) of each status, checked top-down.
_STATUS_THRESHOLDS: tuple[tuple[Decimal, ProgressStatus], ...] = (
    (Decimal("100"), ProgressStatus.COMPLETE),
    (Decimal("75"), ProgressStatus.NEAR),
    (Decimal("50"), ProgressStatus.HALFWAY),
    (Decimal("25"), ProgressStatus.STARTED),
)

STATUS_MESSAGES: dict[ProgressStatus, str] = {
    ProgressStatus.COMPLETE: "Emergency fund goal achieved!",
    ProgressStatus.NEAR: "Almost there! Keep going!",
    ProgressStatus.HALFWAY: "Great progress! Halfway to your goal!",
    ProgressStatus.STARTED: "Good start! Keep building your fund!",
    ProgressStatus.BEGINNING: "Start building your emergency fund today!",
}


class ContributionPolicy(str, Enum):
    """What counts as the monthly contribution when no saving amount is set."""

    NET_BALANCE = "net_balance"
    ZERO = "zero"


def _decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def classify_progress(percent: Decimal | int | float) -> ProgressStatus:
    value = _decimal(percent)
    for threshold, status in _STATUS_THRESHOLDS:
        if value >= threshold:
            return status
    return ProgressStatus.BEGINNING


def progress_tone(percent: Decimal | int | float) -> str:
    value = _decimal(percent)
    if value >= 100:
        return "success"
    if value >= 50:
        return "warning"
    return "danger"


def track_target(
    goal: Decimal | int | float | str,
    current_balance: Decimal | int | float | str,
    monthly_contribution: Decimal | int | float | str,
) -> TargetProgress:
    """
    Progress towards a savings goal.

    A goal of zero or less reports 0% complete and nothing needed, and a
    contribution of zero or less reports 0 months to goal; neither case divides.
    """
    goal = _decimal(goal)
    current_balance = _decimal(current_balance)
    monthly_contribution = _decimal(monthly_contribution)

    if goal <= 0:
        # No target set: nothing is needed, whatever the balance.
        amount_needed = ZERO
        percent = ZERO
    else:
        amount_needed = max(ZERO, goal - current_balance)
        percent = min(HUNDRED, max(ZERO, current_balance / goal * HUNDRED))

    if monthly_contribution <= 0:
        months = 0
    else:
        months = int((amount_needed / monthly_contribution).to_integral_value(rounding=ROUND_CEILING))

    return TargetProgress(
        goal=goal,
        current_balance=current_balance,
        monthly_contribution=monthly_contribution,
        amount_needed=amount_needed,
        percent_complete=percent,
        months_to_goal=months,
        status=classify_progress(percent),
    )


def resolve_monthly_contribution(
    saving_amount: TargetAmount,
    net_balance: Decimal,
    policy: ContributionPolicy = ContributionPolicy.NET_BALANCE,
) -> Decimal:
    if isinstance(saving_amount, Value):
        return saving_amount.amount
    if policy == ContributionPolicy.NET_BALANCE:
        return net_balance
    return ZERO


def track_emergency_fund(
    params: TargetParameters,
    net_balance: Decimal,
    policy: ContributionPolicy = ContributionPolicy.NET_BALANCE,
) -> TargetProgress:
    """
    Emergency-fund progress from the user's target parameters.

    The current balance is the accumulated ``total_savings``. An unset goal
    means no target (goal 0); an unset saving amount is resolved by
    ``policy``.
    """
    contribution = resolve_monthly_contribution(params.saving_amount, net_balance, policy)
    return track_target(
        goal=amount_or(params.emergency_fund_goal, ZERO),
        current_balance=params.total_savings,
        monthly_contribution=contribution,
    )


def recommendations(progress: TargetProgress) -> list[str]:
    if progress.status == ProgressStatus.COMPLETE:
        return [
            "Emergency fund complete. Consider investing any excess or setting a new goal.",
        ]
    tips = [
        "Review your expenses to identify areas where you can cut back.",
        "Consider automating transfers to your emergency fund.",
        "Look for ways to increase your income.",
    ]
    if progress.months_to_goal > 0:
        tips.append(
            f"At the current contribution it will take about {progress.months_to_goal} "
            f"month{'s' if progress.months_to_goal != 1 else ''} to reach your goal."
        )
    return tips
