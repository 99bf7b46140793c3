from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any

from pocketledger.domain.errors import DuplicateCategoryError
from pocketledger.domain.models import Category, Transaction, TransactionType, UserSettings, target_amount
from pocketledger.domain.schemas import (
    CategoryCreate,
    CategoryUpdate,
    DateRange,
    SettingsUpdate,
    TransactionCreate,
    TransactionQuery,
    TransactionUpdate,
)
from pocketledger.infrastructure.stores.base import FinanceStore

logger = logging.getLogger(__name__)

_TARGET_FIELDS = ("monthly_income_target", "emergency_fund_goal", "saving_amount")


class FinanceService:
    """
    Write side of the tracker: validated CRUD over a ``FinanceStore``.

    Payloads may be passed as the pydantic models or as plain dicts; dicts
    are validated here and a ``pydantic.ValidationError`` (a ``ValueError``)
    names the offending field.
    """

    def __init__(self, store: FinanceStore):
        self._store = store

    @property
    def store(self) -> FinanceStore:
        return self._store

    # ---- transactions ----
    def list_transactions(
        self,
        user_id: str,
        start: date | str | None = None,
        end: date | str | None = None,
        category: str | None = None,
        txn_type: TransactionType | str | None = None,
        limit: int | None = None,
    ) -> list[Transaction]:
        date_range = None
        if start is not None or end is not None:
            date_range = DateRange(start=start or date.min, end=end or date.max)
        query = TransactionQuery(
            user_id=user_id,
            date_range=date_range,
            category=category,
            type=txn_type,
            limit=limit,
        )
        return self._store.list_transactions(query)

    def get_transaction(self, user_id: str, transaction_id: str) -> Transaction:
        return self._store.get_transaction(user_id, transaction_id)

    def add_transaction(self, user_id: str, payload: TransactionCreate | dict[str, Any]) -> Transaction:
        data = TransactionCreate.model_validate(payload)
        txn = self._store.create_transaction(user_id, data.model_dump())
        logger.info(
            "FinanceService created transaction user_id=%s id=%s type=%s amount=%s",
            user_id,
            txn.id,
            txn.type.value,
            txn.amount,
        )
        return txn

    def edit_transaction(
        self, user_id: str, transaction_id: str, payload: TransactionUpdate | dict[str, Any]
    ) -> Transaction:
        changes = TransactionUpdate.model_validate(payload).changes()
        txn = self._store.update_transaction(user_id, transaction_id, changes)
        logger.info(
            "FinanceService updated transaction user_id=%s id=%s fields=%s",
            user_id,
            transaction_id,
            sorted(changes),
        )
        return txn

    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        self._store.delete_transaction(user_id, transaction_id)
        logger.info("FinanceService deleted transaction user_id=%s id=%s", user_id, transaction_id)

    # ---- categories ----
    def list_categories(self, user_id: str, txn_type: TransactionType | str | None = None) -> list[Category]:
        categories = self._store.list_categories(user_id)
        if txn_type is not None:
            wanted = TransactionType(txn_type)
            categories = [c for c in categories if c.type == wanted]
        return categories

    def _ensure_unique_name(self, user_id: str, name: str, exclude_id: str | None = None) -> None:
        for category in self._store.list_categories(user_id):
            if category.name == name and category.id != exclude_id:
                raise DuplicateCategoryError(name)

    def add_category(self, user_id: str, payload: CategoryCreate | dict[str, Any]) -> Category:
        data = CategoryCreate.model_validate(payload)
        self._ensure_unique_name(user_id, data.name)
        category = self._store.create_category(user_id, data.model_dump())
        logger.info("FinanceService created category user_id=%s id=%s name=%s", user_id, category.id, category.name)
        return category

    def edit_category(self, user_id: str, category_id: str, payload: CategoryUpdate | dict[str, Any]) -> Category:
        changes = CategoryUpdate.model_validate(payload).changes()
        if "name" in changes:
            self._ensure_unique_name(user_id, changes["name"], exclude_id=category_id)
        category = self._store.update_category(user_id, category_id, changes)
        logger.info(
            "FinanceService updated category user_id=%s id=%s fields=%s", user_id, category_id, sorted(changes)
        )
        return category

    def delete_category(self, user_id: str, category_id: str) -> None:
        # Transactions keep their category name; display falls back to the neutral colour.
        self._store.delete_category(user_id, category_id)
        logger.info("FinanceService deleted category user_id=%s id=%s", user_id, category_id)

    # ---- settings ----
    def get_settings(self, user_id: str) -> UserSettings:
        return self._store.get_settings(user_id)

    def update_settings(self, user_id: str, payload: SettingsUpdate | dict[str, Any]) -> UserSettings:
        changes = SettingsUpdate.model_validate(payload).changes()
        settings = self._store.get_settings(user_id)
        targets = settings.targets

        target_changes: dict[str, Any] = {
            key: target_amount(changes[key]) for key in _TARGET_FIELDS if key in changes
        }
        if "total_savings" in changes:
            target_changes["total_savings"] = changes["total_savings"]

        updated = replace(
            settings,
            targets=replace(targets, **target_changes),
            theme=changes.get("theme", settings.theme),
        )
        saved = self._store.save_settings(updated)
        logger.info("FinanceService updated settings user_id=%s fields=%s", user_id, sorted(changes))
        return saved
