from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pocketledger.domain.models import TransactionType

_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")

# Field annotations below use this alias because a field named "date" shadows the type.
Day = date


def reject_explicit_nulls(model: BaseModel, fields: tuple[str, ...]) -> None:
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} cannot be null")


def coerce_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return value

    text = value.strip()
    if not text:
        return value

    # Canonical format first.
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%m-%d-%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return value


class DateRange(BaseModel):
    """Inclusive calendar window; both ``start`` and ``end`` belong to it."""

    model_config = ConfigDict(frozen=True)

    start: date = Field(description="Start date in YYYY-MM-DD format, e.g. 2026-01-01.")
    end: date = Field(description="End date in YYYY-MM-DD format, e.g. 2026-01-31.")

    @field_validator("start", "end", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        return coerce_date(value)

    @model_validator(mode="after")
    def validate_order(self) -> "DateRange":
        if self.start > self.end:
            raise ValueError("date_range.start must be <= date_range.end")
        return self

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> List[date]:
        return [self.start + timedelta(days=offset) for offset in range((self.end - self.start).days + 1)]


class TransactionCreate(BaseModel):
    amount: Decimal
    category: str
    date: Day
    type: TransactionType
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        return coerce_date(value)

    @field_validator("amount")
    @classmethod
    def amount_non_zero(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or value == 0:
            raise ValueError("amount is required and must be non-zero")
        return value

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("category is required")
        return text


class TransactionUpdate(BaseModel):
    amount: Optional[Decimal] = None
    category: Optional[str] = None
    date: Optional[Day] = None
    type: Optional[TransactionType] = None
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        return coerce_date(value)

    @field_validator("amount")
    @classmethod
    def amount_non_zero(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and (not value.is_finite() or value == 0):
            raise ValueError("amount must be non-zero")
        return value

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        text = value.strip()
        if not text:
            raise ValueError("category must not be blank")
        return text

    @model_validator(mode="after")
    def validate_required_values(self) -> "TransactionUpdate":
        # Only notes may be cleared.
        reject_explicit_nulls(self, ("amount", "category", "date", "type"))
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CategoryCreate(BaseModel):
    name: str
    color: str
    type: TransactionType

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("name is required")
        return text

    @field_validator("color")
    @classmethod
    def color_is_hex(cls, value: str) -> str:
        if not _COLOR_RE.match(value):
            raise ValueError("color must be a #rrggbb hex string")
        return value.lower()


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None
    type: Optional[TransactionType] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        text = value.strip()
        if not text:
            raise ValueError("name must not be blank")
        return text

    @field_validator("color")
    @classmethod
    def color_is_hex(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not _COLOR_RE.match(value):
            raise ValueError("color must be a #rrggbb hex string")
        return value.lower() if value else value

    @model_validator(mode="after")
    def validate_required_values(self) -> "CategoryUpdate":
        reject_explicit_nulls(self, ("name", "color", "type"))
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class SettingsUpdate(BaseModel):
    """
    Partial settings update.

    An omitted field is left untouched; an explicit ``null`` clears the
    target back to unset.
    """

    monthly_income_target: Optional[Decimal] = Field(default=None, ge=0)
    emergency_fund_goal: Optional[Decimal] = Field(default=None, ge=0)
    saving_amount: Optional[Decimal] = Field(default=None, ge=0)
    total_savings: Optional[Decimal] = Field(default=None, ge=0)
    theme: Optional[Literal["light", "dark"]] = None

    @model_validator(mode="after")
    def validate_required_values(self) -> "SettingsUpdate":
        reject_explicit_nulls(self, ("total_savings", "theme"))
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class TransactionQuery(BaseModel):
    """
    Store-level transaction query for one user.

    Required:
      - user_id
    Optional:
      - date_range (inclusive)
      - category / type (equality)
      - limit
    Results are ordered newest first.
    """

    user_id: str = Field(min_length=1)
    date_range: Optional[DateRange] = None
    category: Optional[str] = None
    type: Optional[TransactionType] = None
    limit: Optional[int] = Field(default=None, ge=1)


class ToolContext(BaseModel):
    user_id: str
    currency: str = "USD"


class ToolRequest(BaseModel):
    request_id: str
    tool: str
    args: Dict[str, Any] = Field(default_factory=dict)
    context: ToolContext


class ToolResponse(BaseModel):
    request_id: str
    tool: str
    ok: bool = True
    result: Dict[str, Any] = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)
    context: ToolContext


class MonthlyOverview(BaseModel):
    user_id: str
    year: int
    month: int
    month_name: str
    summary: Dict[str, Any] = Field(default_factory=dict)
    ledger: Dict[str, Any] = Field(default_factory=dict)
    daily_cashflow: Dict[str, Any] = Field(default_factory=dict)
    target: Dict[str, Any] = Field(default_factory=dict)
    errors: List[str] = Field(default_factory=list)
