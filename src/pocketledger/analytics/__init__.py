from pocketledger.analytics.aggregator import daily_cash_flow, summarize, top_categories
from pocketledger.analytics.categories import FALLBACK_COLOR, color_of
from pocketledger.analytics.ledger import project, sort_transactions
from pocketledger.analytics.period import month_window, month_window_for
from pocketledger.analytics.targets import ContributionPolicy, classify_progress, track_emergency_fund, track_target

__all__ = [
    "FALLBACK_COLOR",
    "ContributionPolicy",
    "classify_progress",
    "color_of",
    "daily_cash_flow",
    "month_window",
    "month_window_for",
    "project",
    "sort_transactions",
    "summarize",
    "top_categories",
    "track_emergency_fund",
    "track_target",
]
