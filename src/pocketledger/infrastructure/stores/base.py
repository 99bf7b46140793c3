from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from pocketledger.domain.models import Category, Transaction, UserSettings
from pocketledger.domain.schemas import TransactionQuery


def filter_transactions(transactions: Iterable[Transaction], query: TransactionQuery) -> list[Transaction]:
    """Equality/range filtering shared by store implementations; newest first."""
    rows = []
    for txn in transactions:
        if query.date_range is not None and not query.date_range.contains(txn.date):
            continue
        if query.category is not None and txn.category != query.category:
            continue
        if query.type is not None and txn.type != query.type:
            continue
        rows.append(txn)
    rows.sort(key=lambda txn: txn.date, reverse=True)
    if query.limit is not None:
        rows = rows[: query.limit]
    return rows


class FinanceStore(ABC):
    """Per-user persistence contract for transactions, categories and settings."""

    name: str = "store"

    # ---- transactions ----
    @abstractmethod
    def list_transactions(self, query: TransactionQuery) -> list[Transaction]:
        raise NotImplementedError

    @abstractmethod
    def get_transaction(self, user_id: str, transaction_id: str) -> Transaction:
        raise NotImplementedError

    @abstractmethod
    def create_transaction(self, user_id: str, fields: dict[str, Any]) -> Transaction:
        raise NotImplementedError

    @abstractmethod
    def update_transaction(self, user_id: str, transaction_id: str, changes: dict[str, Any]) -> Transaction:
        raise NotImplementedError

    @abstractmethod
    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        raise NotImplementedError

    # ---- categories ----
    @abstractmethod
    def list_categories(self, user_id: str) -> list[Category]:
        raise NotImplementedError

    @abstractmethod
    def create_category(self, user_id: str, fields: dict[str, Any]) -> Category:
        raise NotImplementedError

    @abstractmethod
    def update_category(self, user_id: str, category_id: str, changes: dict[str, Any]) -> Category:
        raise NotImplementedError

    @abstractmethod
    def delete_category(self, user_id: str, category_id: str) -> None:
        raise NotImplementedError

    # ---- settings ----
    @abstractmethod
    def get_settings(self, user_id: str) -> UserSettings:
        raise NotImplementedError

    @abstractmethod
    def save_settings(self, settings: UserSettings) -> UserSettings:
        raise NotImplementedError
