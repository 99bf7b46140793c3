from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

from pocketledger.domain.errors import DuplicateCategoryError, RecordNotFoundError, StoreError
from pocketledger.domain.models import Category, TargetAmount, TransactionType, UserSettings, Value
from pocketledger.domain.schemas import (
    CategoryCreate,
    CategoryUpdate,
    SettingsUpdate,
    TransactionCreate,
    TransactionUpdate,
)
from pocketledger.infrastructure.get_transactions import GetTransactions
from pocketledger.interface.cli import Services, build_services
from pocketledger.tools.registry import registry


def _category_out(category: Category) -> dict[str, Any]:
    return {"id": category.id, "name": category.name, "color": category.color, "type": category.type.value}


def _target_out(value: TargetAmount) -> float | None:
    return float(value.amount) if isinstance(value, Value) else None


def _settings_out(settings: UserSettings) -> dict[str, Any]:
    targets = settings.targets
    return {
        "user_id": settings.user_id,
        "theme": settings.theme,
        "monthly_income_target": _target_out(targets.monthly_income_target),
        "emergency_fund_goal": _target_out(targets.emergency_fund_goal),
        "saving_amount": _target_out(targets.saving_amount),
        "total_savings": float(targets.total_savings),
    }


def create_app(services: Services | None = None) -> FastAPI:
    services = services or build_services()
    finance = services.finance
    app = FastAPI(title="PocketLedger API")

    @app.exception_handler(RecordNotFoundError)
    def _not_found(_: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DuplicateCategoryError)
    def _duplicate(_: Request, exc: DuplicateCategoryError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    def _invalid(_: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    def _store_error(_: Request, exc: StoreError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/tools")
    def list_tools(namespace: Optional[str] = None) -> list[dict[str, Any]]:
        return [
            {"name": spec.name, "description": spec.description, "args_schema": spec.args_schema}
            for spec in registry.list_specs(namespace)
        ]

    # ---- transactions ----
    @app.get("/users/{user_id}/transactions")
    def list_transactions(
        user_id: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
        category: Optional[str] = None,
        txn_type: Optional[TransactionType] = Query(default=None, alias="type"),
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        txns = finance.list_transactions(user_id, start=start, end=end, category=category, txn_type=txn_type, limit=limit)
        return [GetTransactions.serialize_transaction(txn) for txn in txns]

    @app.post("/users/{user_id}/transactions", status_code=201)
    def add_transaction(user_id: str, payload: TransactionCreate) -> dict[str, Any]:
        return GetTransactions.serialize_transaction(finance.add_transaction(user_id, payload))

    @app.get("/users/{user_id}/transactions/{transaction_id}")
    def get_transaction(user_id: str, transaction_id: str) -> dict[str, Any]:
        return GetTransactions.serialize_transaction(finance.get_transaction(user_id, transaction_id))

    @app.patch("/users/{user_id}/transactions/{transaction_id}")
    def edit_transaction(user_id: str, transaction_id: str, payload: TransactionUpdate) -> dict[str, Any]:
        return GetTransactions.serialize_transaction(finance.edit_transaction(user_id, transaction_id, payload))

    @app.delete("/users/{user_id}/transactions/{transaction_id}", status_code=204)
    def delete_transaction(user_id: str, transaction_id: str) -> Response:
        finance.delete_transaction(user_id, transaction_id)
        return Response(status_code=204)

    # ---- categories ----
    @app.get("/users/{user_id}/categories")
    def list_categories(
        user_id: str, txn_type: Optional[TransactionType] = Query(default=None, alias="type")
    ) -> list[dict[str, Any]]:
        return [_category_out(c) for c in finance.list_categories(user_id, txn_type=txn_type)]

    @app.post("/users/{user_id}/categories", status_code=201)
    def add_category(user_id: str, payload: CategoryCreate) -> dict[str, Any]:
        return _category_out(finance.add_category(user_id, payload))

    @app.patch("/users/{user_id}/categories/{category_id}")
    def edit_category(user_id: str, category_id: str, payload: CategoryUpdate) -> dict[str, Any]:
        return _category_out(finance.edit_category(user_id, category_id, payload))

    @app.delete("/users/{user_id}/categories/{category_id}", status_code=204)
    def delete_category(user_id: str, category_id: str) -> Response:
        finance.delete_category(user_id, category_id)
        return Response(status_code=204)

    # ---- settings ----
    @app.get("/users/{user_id}/settings")
    def get_settings(user_id: str) -> dict[str, Any]:
        return _settings_out(finance.get_settings(user_id))

    @app.put("/users/{user_id}/settings")
    def update_settings(user_id: str, payload: SettingsUpdate) -> dict[str, Any]:
        return _settings_out(finance.update_settings(user_id, payload))

    # ---- overview ----
    @app.get("/users/{user_id}/overview/{year}/{month}")
    def monthly_overview(
        user_id: str,
        year: int,
        month: int,
        sort: str = "date",
        direction: str = "desc",
    ) -> dict[str, Any]:
        if month < 1 or month > 12:
            raise HTTPException(status_code=422, detail="month must be an integer from 1 to 12")
        overview = services.dashboard.monthly_overview(user_id, year, month, sort=sort, direction=direction)
        return overview.model_dump()

    return app


app = create_app()
