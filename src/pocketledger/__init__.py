"""PocketLedger: personal finance tracking with monthly summaries, a running-balance ledger and emergency-fund targets."""

__version__ = "0.1.0"
