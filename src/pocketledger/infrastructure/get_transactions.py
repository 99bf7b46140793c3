from __future__ import annotations

import logging
import os
from typing import Any

from pydantic import ValidationError

from pocketledger.domain.models import Transaction
from pocketledger.domain.schemas import TransactionQuery
from pocketledger.infrastructure.stores.base import FinanceStore
from pocketledger.infrastructure.stores.json_file import JsonFileFinanceStore
from pocketledger.infrastructure.stores.memory import InMemoryFinanceStore

logger = logging.getLogger(__name__)


def build_store() -> FinanceStore:
    """JSON file store when ``POCKETLEDGER_STORE_PATH`` is set, in-memory otherwise."""
    path = os.getenv("POCKETLEDGER_STORE_PATH")
    if path:
        return JsonFileFinanceStore(path)
    return InMemoryFinanceStore()


class GetTransactions:
    """
    Read side of the transaction store.

    Accepts a ``TransactionQuery`` or a plain dict, validates it, and returns
    domain transactions (``fetch``) or JSON-ready rows (``get_transactions``).
    The store can be swapped at runtime via ``set_store``.
    """

    def __init__(self, store: FinanceStore | None = None) -> None:
        self._store = store or build_store()

    @property
    def store(self) -> FinanceStore:
        return self._store

    def set_store(self, store: FinanceStore) -> None:
        self._store = store

    def fetch(self, filters: TransactionQuery | dict[str, Any]) -> list[Transaction]:
        query = self._normalize_filters(filters)
        txns = self._store.list_transactions(query)
        logger.debug(
            "GetTransactions store=%s user_id=%s rows=%d", self._store.name, query.user_id, len(txns)
        )
        return txns

    def get_transactions(self, filters: TransactionQuery | dict[str, Any]) -> list[dict[str, Any]]:
        return [self.serialize_transaction(txn) for txn in self.fetch(filters)]

    def _normalize_filters(self, filters: TransactionQuery | dict[str, Any]) -> TransactionQuery:
        if isinstance(filters, TransactionQuery):
            return filters
        try:
            query = TransactionQuery.model_validate(filters)
        except ValidationError as exc:
            raise ValueError(f"Invalid TransactionQuery: {exc}") from exc
        return query

    @staticmethod
    def serialize_transaction(txn: Transaction) -> dict[str, Any]:
        return {
            "id": txn.id,
            "date": txn.date.isoformat(),
            "category": txn.category,
            "type": txn.type.value,
            "amount": float(txn.amount),
            "notes": txn.notes,
        }


# Singleton instance used across the codebase.
get_transactions = GetTransactions()
