from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from datetime import date

from pocketledger.application.dashboard import DashboardService
from pocketledger.application.finance_service import FinanceService
from pocketledger.application.tool_executor import ToolExecutor
from pocketledger.infrastructure.get_transactions import get_transactions
from pocketledger.infrastructure.stores.base import FinanceStore
from pocketledger.tools.registry import registry


@dataclass
class Services:
    finance: FinanceService
    dashboard: DashboardService


def build_services(store: FinanceStore | None = None) -> Services:
    import pocketledger.tools  # noqa: F401

    if store is not None:
        get_transactions.set_store(store)
    store = get_transactions.store
    return Services(
        finance=FinanceService(store),
        dashboard=DashboardService(
            ToolExecutor(registry),
            currency=os.getenv("POCKETLEDGER_CURRENCY", "USD"),
        ),
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    today = date.today()
    parser = argparse.ArgumentParser(prog="pocketledger", description="Print the monthly overview as JSON.")
    parser.add_argument("--user", default=os.getenv("POCKETLEDGER_USER_ID", "u_cli"), help="User id to report on.")
    parser.add_argument("--year", type=int, default=today.year)
    parser.add_argument("--month", type=int, default=today.month, choices=range(1, 13), metavar="1-12")
    parser.add_argument("--sort", default="date", choices=["date", "amount", "category"])
    parser.add_argument("--direction", default="desc", choices=["asc", "desc"])
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    services = build_services()
    overview = services.dashboard.monthly_overview(
        args.user,
        args.year,
        args.month,
        sort=args.sort,
        direction=args.direction,
    )
    print(overview.model_dump_json(indent=2))
    return 1 if overview.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
