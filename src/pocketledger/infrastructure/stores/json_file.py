from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from pocketledger.domain.errors import StoreError
from pocketledger.domain.models import (
    Category,
    TargetAmount,
    TargetParameters,
    Transaction,
    TransactionType,
    UserSettings,
    Value,
    target_amount,
)
from pocketledger.infrastructure.stores.memory import InMemoryFinanceStore

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _amount_out(value: TargetAmount) -> str | None:
    return str(value.amount) if isinstance(value, Value) else None


def _transaction_to_json(txn: Transaction) -> dict[str, Any]:
    return {
        "id": txn.id,
        "amount": str(txn.amount),
        "category": txn.category,
        "date": txn.date.isoformat(),
        "type": txn.type.value,
        "notes": txn.notes,
    }


def _transaction_from_json(raw: dict[str, Any]) -> Transaction:
    return Transaction(
        id=str(raw["id"]),
        amount=Decimal(str(raw["amount"])),
        category=str(raw["category"]),
        date=date.fromisoformat(raw["date"]),
        type=TransactionType(raw["type"]),
        notes=raw.get("notes"),
    )


def _category_to_json(category: Category) -> dict[str, Any]:
    return {"id": category.id, "name": category.name, "color": category.color, "type": category.type.value}


def _category_from_json(raw: dict[str, Any]) -> Category:
    return Category(
        id=str(raw["id"]),
        name=str(raw["name"]),
        color=str(raw["color"]),
        type=TransactionType(raw["type"]),
    )


def _settings_to_json(settings: UserSettings) -> dict[str, Any]:
    targets = settings.targets
    return {
        "user_id": settings.user_id,
        "theme": settings.theme,
        "monthly_income_target": _amount_out(targets.monthly_income_target),
        "emergency_fund_goal": _amount_out(targets.emergency_fund_goal),
        "saving_amount": _amount_out(targets.saving_amount),
        "total_savings": str(targets.total_savings),
    }


def _settings_from_json(raw: dict[str, Any]) -> UserSettings:
    return UserSettings(
        user_id=str(raw["user_id"]),
        theme=str(raw.get("theme") or "light"),
        targets=TargetParameters(
            monthly_income_target=target_amount(raw.get("monthly_income_target")),
            emergency_fund_goal=target_amount(raw.get("emergency_fund_goal")),
            saving_amount=target_amount(raw.get("saving_amount")),
            total_savings=Decimal(str(raw.get("total_savings") or "0")),
        ),
    )


class JsonFileFinanceStore(InMemoryFinanceStore):
    """In-memory store mirrored to a single JSON document after every mutation."""

    name = "json_file"

    def __init__(self, path: str | Path | None = None, seed_categories: bool = True) -> None:
        super().__init__(seed_categories=seed_categories)
        self._path = Path(path or os.getenv("POCKETLEDGER_STORE_PATH", "pocketledger.json"))
        if self._path.exists():
            self._load()

    def _load(self) -> None:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Unable to read store file {self._path}: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("users"), dict):
            raise StoreError(f"Store file {self._path} is missing the 'users' mapping")

        try:
            for user_id, user in payload["users"].items():
                self._transactions[user_id] = {
                    t.id: t for t in (_transaction_from_json(raw) for raw in user.get("transactions", []))
                }
                self._categories[user_id] = {
                    c.id: c for c in (_category_from_json(raw) for raw in user.get("categories", []))
                }
                self._settings[user_id] = _settings_from_json({"user_id": user_id, **user.get("settings", {})})
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise StoreError(f"Store file {self._path} has a malformed record: {exc}") from exc

        logger.info("Store %s loaded path=%s users=%d", self.name, self._path, len(self._settings))

    def _changed(self) -> None:
        payload = {
            "schema_version": SCHEMA_VERSION,
            "users": {
                user_id: {
                    "transactions": [_transaction_to_json(t) for t in self._transactions[user_id].values()],
                    "categories": [_category_to_json(c) for c in self._categories[user_id].values()],
                    "settings": _settings_to_json(settings),
                }
                for user_id, settings in self._settings.items()
            },
        }
        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".pocketledger-", suffix=".json", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(f"Unable to write store file {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug("Store %s saved path=%s", self.name, self._path)
