from __future__ import annotations


class FinanceError(Exception):
    pass


class RecordNotFoundError(FinanceError, LookupError):
    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"{table} record not found: {record_id}")
        self.table = table
        self.record_id = record_id


class DuplicateCategoryError(FinanceError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Category name already exists: {name!r}")
        self.name = name


class StoreError(FinanceError, RuntimeError):
    pass
