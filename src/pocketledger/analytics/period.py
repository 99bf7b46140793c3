from __future__ import annotations

from calendar import monthrange
from datetime import date

from pocketledger.domain.schemas import DateRange


def month_window_for(year: int, month: int) -> DateRange:
    if month < 1 or month > 12:
        raise ValueError(f"month must be an integer from 1 to 12, got {month}")
    start = date(year, month, 1)
    end = date(year, month, monthrange(year, month)[1])
    return DateRange(start=start, end=end)


def month_window(reference: date) -> DateRange:
    """First through last calendar day of the month containing ``reference``."""
    return month_window_for(reference.year, reference.month)
