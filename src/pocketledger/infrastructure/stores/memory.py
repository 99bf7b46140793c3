from __future__ import annotations

import copy
import logging
import uuid
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Iterator

from pocketledger.analytics.categories import DEFAULT_CATEGORIES
from pocketledger.domain.errors import RecordNotFoundError
from pocketledger.domain.models import Category, Transaction, TransactionType, UserSettings
from pocketledger.domain.schemas import TransactionQuery
from pocketledger.infrastructure.stores.base import FinanceStore, filter_transactions

logger = logging.getLogger(__name__)

_TRANSACTION_FIELDS = {"amount", "category", "date", "type", "notes"}
_CATEGORY_FIELDS = {"name", "color", "type"}


def _new_id() -> str:
    return uuid.uuid4().hex


def default_categories() -> list[Category]:
    return [
        Category(id=_new_id(), name=name, color=color, type=txn_type)
        for name, color, txn_type in DEFAULT_CATEGORIES
    ]


class InMemoryFinanceStore(FinanceStore):
    """
    Dict-backed store keyed by user id.

    Users are created lazily on first access and seeded with the default
    category palette. Records handed out are copies; mutating them does not
    touch the store. A mutation whose ``_changed`` hook raises is rolled back.
    """

    name = "memory"

    def __init__(self, seed_categories: bool = True) -> None:
        self._seed_categories = seed_categories
        self._transactions: dict[str, dict[str, Transaction]] = {}
        self._categories: dict[str, dict[str, Category]] = {}
        self._settings: dict[str, UserSettings] = {}

    # ---- users ----
    def _ensure_user(self, user_id: str) -> None:
        if user_id in self._settings:
            return
        logger.info("Store %s creating user user_id=%s", self.name, user_id)
        self._transactions[user_id] = {}
        categories = default_categories() if self._seed_categories else []
        self._categories[user_id] = {c.id: c for c in categories}
        self._settings[user_id] = UserSettings(user_id=user_id)

    def _changed(self) -> None:
        """Hook called after every mutation."""

    @contextmanager
    def _mutation(self, user_id: str) -> Iterator[None]:
        # Stored records are replaced, never edited in place, so shallow copies suffice.
        transactions = dict(self._transactions[user_id])
        categories = dict(self._categories[user_id])
        settings = self._settings[user_id]
        try:
            yield
            self._changed()
        except Exception:
            self._transactions[user_id] = transactions
            self._categories[user_id] = categories
            self._settings[user_id] = settings
            logger.warning("Store %s rolled back mutation user_id=%s", self.name, user_id)
            raise

    # ---- transactions ----
    def list_transactions(self, query: TransactionQuery) -> list[Transaction]:
        self._ensure_user(query.user_id)
        rows = filter_transactions(self._transactions[query.user_id].values(), query)
        return [copy.copy(txn) for txn in rows]

    def _transaction(self, user_id: str, transaction_id: str) -> Transaction:
        self._ensure_user(user_id)
        try:
            return self._transactions[user_id][transaction_id]
        except KeyError:
            raise RecordNotFoundError("transactions", transaction_id) from None

    def get_transaction(self, user_id: str, transaction_id: str) -> Transaction:
        return copy.copy(self._transaction(user_id, transaction_id))

    def create_transaction(self, user_id: str, fields: dict[str, Any]) -> Transaction:
        self._ensure_user(user_id)
        values = {k: v for k, v in fields.items() if k in _TRANSACTION_FIELDS}
        values["type"] = TransactionType(values["type"])
        txn = Transaction(id=_new_id(), **values)
        with self._mutation(user_id):
            self._transactions[user_id][txn.id] = txn
        return copy.copy(txn)

    def update_transaction(self, user_id: str, transaction_id: str, changes: dict[str, Any]) -> Transaction:
        current = self._transaction(user_id, transaction_id)
        values = {k: v for k, v in changes.items() if k in _TRANSACTION_FIELDS}
        if "type" in values:
            values["type"] = TransactionType(values["type"])
        updated = replace(current, **values)
        with self._mutation(user_id):
            self._transactions[user_id][transaction_id] = updated
        return copy.copy(updated)

    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        self._transaction(user_id, transaction_id)
        with self._mutation(user_id):
            del self._transactions[user_id][transaction_id]

    # ---- categories ----
    def list_categories(self, user_id: str) -> list[Category]:
        self._ensure_user(user_id)
        return [copy.copy(c) for c in self._categories[user_id].values()]

    def _category(self, user_id: str, category_id: str) -> Category:
        self._ensure_user(user_id)
        try:
            return self._categories[user_id][category_id]
        except KeyError:
            raise RecordNotFoundError("categories", category_id) from None

    def create_category(self, user_id: str, fields: dict[str, Any]) -> Category:
        self._ensure_user(user_id)
        values = {k: v for k, v in fields.items() if k in _CATEGORY_FIELDS}
        values["type"] = TransactionType(values["type"])
        category = Category(id=_new_id(), **values)
        with self._mutation(user_id):
            self._categories[user_id][category.id] = category
        return copy.copy(category)

    def update_category(self, user_id: str, category_id: str, changes: dict[str, Any]) -> Category:
        current = self._category(user_id, category_id)
        values = {k: v for k, v in changes.items() if k in _CATEGORY_FIELDS}
        if "type" in values:
            values["type"] = TransactionType(values["type"])
        updated = replace(current, **values)
        with self._mutation(user_id):
            self._categories[user_id][category_id] = updated
        return copy.copy(updated)

    def delete_category(self, user_id: str, category_id: str) -> None:
        self._category(user_id, category_id)
        with self._mutation(user_id):
            del self._categories[user_id][category_id]

    # ---- settings ----
    def get_settings(self, user_id: str) -> UserSettings:
        self._ensure_user(user_id)
        return copy.deepcopy(self._settings[user_id])

    def save_settings(self, settings: UserSettings) -> UserSettings:
        self._ensure_user(settings.user_id)
        with self._mutation(settings.user_id):
            self._settings[settings.user_id] = copy.deepcopy(settings)
        return copy.deepcopy(settings)
