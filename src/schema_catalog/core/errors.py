"""Exceptions raised while reading the schema catalog.

Every failure is terminal for the read that raised it; nothing here is retried.
"""

from __future__ import annotations

from typing import Optional


class SchemaCatalogError(Exception):
    """Base class for schema catalog read failures."""

    def __init__(self, message: str, database: str) -> None:
        super().__init__(message)
        self.database = database


class TransactionError(SchemaCatalogError):
    """The scoped transaction for a database could not be opened."""

    def __init__(self, database: str, cause: Exception) -> None:
        super().__init__(f"could not start transaction for database {database!r}: {cause}", database)
        self.cause = cause


class QueryExecutionError(SchemaCatalogError):
    """The composed query failed at the session layer."""

    def __init__(self, database: str, sql: str, cause: Exception) -> None:
        super().__init__(f"query failed for database {database!r}: {cause}", database)
        self.sql = sql
        self.cause = cause


class ScanError(SchemaCatalogError):
    """A returned row could not be decoded into a single schema name."""

    def __init__(self, database: str, cause: Exception, row_index: Optional[int] = None) -> None:
        super().__init__(f"could not scan schema name for database {database!r}: {cause}", database)
        self.cause = cause
        self.row_index = row_index


__all__ = [
    "SchemaCatalogError",
    "TransactionError",
    "QueryExecutionError",
    "ScanError",
]
