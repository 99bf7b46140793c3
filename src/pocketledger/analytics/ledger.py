from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Iterable, Literal

from pocketledger.domain.models import LedgerRow, Transaction

SortField = Literal["date", "amount", "category"]
SortDirection = Literal["asc", "desc"]

DEFAULT_SORT_FIELD: SortField = "date"
DEFAULT_SORT_DIRECTION: SortDirection = "desc"

_SORT_KEYS: dict[str, Callable[[Transaction], Any]] = {
    "date": lambda txn: txn.date,
    "amount": lambda txn: txn.amount,
    "category": lambda txn: txn.category.lower(),
}


def sort_transactions(
    transactions: Iterable[Transaction],
    field: str = DEFAULT_SORT_FIELD,
    direction: str = DEFAULT_SORT_DIRECTION,
) -> list[Transaction]:
    key = _SORT_KEYS.get(field)
    if key is None:
        raise ValueError(f"sort field must be one of {sorted(_SORT_KEYS)}, got {field!r}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"sort direction must be 'asc' or 'desc', got {direction!r}")
    return sorted(transactions, key=key, reverse=direction == "desc")


def project(transactions: Iterable[Transaction]) -> list[LedgerRow]:
    """
    Attach a running balance to each transaction, in the order given.

    The balance at position i is the sum of the signed stored amounts at
    positions 0..i. No sorting happens here; the running balance reads as an
    account balance only when the input is in date order.
    """
    balance = Decimal("0")
    rows: list[LedgerRow] = []
    for txn in transactions:
        balance += txn.amount
        rows.append(LedgerRow(transaction=txn, running_balance=balance))
    return rows
