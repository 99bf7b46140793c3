from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Union


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class Transaction:
    id: str
    amount: Decimal
    category: str
    date: date
    type: TransactionType = TransactionType.EXPENSE
    notes: str | None = None


@dataclass
class Category:
    id: str
    name: str
    color: str
    type: TransactionType = TransactionType.EXPENSE


class Unset:
    """Marker for a target parameter the user has not set."""

    _instance: "Unset | None" = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset()


@dataclass(frozen=True)
class Value:
    amount: Decimal


TargetAmount = Union[Unset, Value]


def target_amount(raw: Decimal | int | float | str | None) -> TargetAmount:
    if raw is None:
        return UNSET
    return Value(Decimal(str(raw)))


def amount_or(value: TargetAmount, default: Decimal) -> Decimal:
    if isinstance(value, Value):
        return value.amount
    return default


@dataclass
class TargetParameters:
    monthly_income_target: TargetAmount = UNSET
    emergency_fund_goal: TargetAmount = UNSET
    saving_amount: TargetAmount = UNSET
    total_savings: Decimal = Decimal("0")


@dataclass
class UserSettings:
    user_id: str
    targets: TargetParameters = field(default_factory=TargetParameters)
    theme: str = "light"


@dataclass
class PeriodSummary:
    start: date
    end: date
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_balance: Decimal = Decimal("0")
    category_breakdown: dict[str, Decimal] = field(default_factory=dict)
    category_counts: dict[str, int] = field(default_factory=dict)
    income_count: int = 0
    expense_count: int = 0

    @property
    def transaction_count(self) -> int:
        return self.income_count + self.expense_count


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: Decimal
    count: int = 0


@dataclass(frozen=True)
class LedgerRow:
    transaction: Transaction
    running_balance: Decimal


@dataclass(frozen=True)
class DailyCashFlow:
    day: date
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


class ProgressStatus(str, Enum):
    COMPLETE = "complete"
    NEAR = "near"
    HALFWAY = "halfway"
    STARTED = "started"
    BEGINNING = "beginning"


@dataclass(frozen=True)
class TargetProgress:
    goal: Decimal
    current_balance: Decimal
    monthly_contribution: Decimal
    amount_needed: Decimal
    percent_complete: Decimal
    months_to_goal: int
    status: ProgressStatus
