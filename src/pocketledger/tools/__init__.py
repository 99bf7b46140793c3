"""Importing this package registers every built-in tool with ``registry``."""

from pocketledger.tools.ledger import category_summary, daily_cashflow, month_summary, running_balance  # noqa: F401
from pocketledger.tools.target import emergency_fund  # noqa: F401
from pocketledger.tools.registry import registry

__all__ = ["registry"]
