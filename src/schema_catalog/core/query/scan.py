from __future__ import annotations

import logging
from typing import Any, List, Sequence

from schema_catalog.core.errors import QueryExecutionError, SchemaCatalogError, ScanError
from schema_catalog.core.models import SchemaFilterConfig
from schema_catalog.core.session import Transaction
from .plan import build_query


logger = logging.getLogger(__name__)


def scan_schema_name(row: Sequence[Any]) -> str:
    """Decode a single-column row into a schema name.

    Raises:
        ValueError: If the row does not have exactly one column.
        TypeError: If the column value is not a string.
    """
    if isinstance(row, (str, bytes)) or len(row) != 1:
        raise ValueError(f"expected a single-column row, got {row!r}")
    value = row[0]
    if not isinstance(value, str):
        raise TypeError(f"expected a string schema name, got {type(value).__name__}")
    return value


def read_schema_names(transaction: Transaction, config: SchemaFilterConfig) -> List[str]:
    """Run the filtered catalog query and return schema names in database order.

    The transaction must already be open on ``config.database``; it is not
    committed, rolled back or closed here. Any row that fails to scan aborts
    the read and no names are returned.

    Raises:
        QueryExecutionError: If the session rejects the query or fails while returning rows.
        ScanError: If a row is not a single string column.
    """
    query = build_query(config)
    sql, params = query.to_sql()
    logger.debug("Schema query for %s: %s", config.database, query.to_literal())

    names: List[str] = []
    try:
        # Lazy cursors can fail while rows are being fetched, not only on execute.
        for index, row in enumerate(transaction.query(sql, params)):
            try:
                names.append(scan_schema_name(row))
            except (TypeError, ValueError) as e:
                raise ScanError(config.database, e, row_index=index) from e
    except SchemaCatalogError:
        raise
    except Exception as e:
        raise QueryExecutionError(config.database, sql, e) from e

    logger.info("Read %d schema(s) from %s", len(names), config.database)
    return names
