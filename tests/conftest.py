"""Shared pytest fixtures for schema catalog tests."""

from __future__ import annotations

from typing import Any, List, Sequence
from unittest.mock import MagicMock

import pytest

from schema_catalog.core.models import SchemaFilterConfig


EXCLUDE_BASE_LITERAL = (
    "SELECT schema_name FROM information_schema.schemata s "
    "WHERE s.schema_name NOT LIKE 'pg_%' AND s.schema_name <> 'information_schema'"
)
INCLUDE_BASE_LITERAL = "SELECT schema_name FROM information_schema.schemata s"


class FakeTransaction:
    """In-memory Transaction returning canned rows and recording queries."""

    def __init__(self, rows: Sequence[Sequence[Any]] = (), error: Exception | None = None):
        self.rows = list(rows)
        self.error = error
        self.calls: List[tuple] = []

    def query(self, sql: str, params: Sequence[Any] = ()):
        self.calls.append((sql, list(params)))
        if self.error is not None:
            raise self.error
        return iter(self.rows)


def make_connection(rows: Sequence[Sequence[Any]] = ()) -> MagicMock:
    """DB-API connection mock whose cursor returns ``rows`` from fetchall()."""
    connection = MagicMock(name="connection")
    cursor = connection.cursor.return_value
    cursor.fetchall.return_value = list(rows)
    return connection


@pytest.fixture
def base_config() -> SchemaFilterConfig:
    return SchemaFilterConfig(database="appdb")


@pytest.fixture
def full_config() -> SchemaFilterConfig:
    return SchemaFilterConfig(
        database="appdb",
        like_any_patterns=["app_%", "test_%"],
        like_all_patterns=["%_v2"],
        not_like_all_patterns=["%_tmp", "%_old"],
        regex_pattern="^[a-z_0-9]+$",
    )
