"""End-to-end schema catalog read for one filter configuration."""

from __future__ import annotations

import logging

from schema_catalog.core.models import SchemaFilterConfig, SchemasResult
from schema_catalog.core.query.identity import generate_schemas_id
from schema_catalog.core.query.scan import read_schema_names
from schema_catalog.core.session import Connector, start_transaction


logger = logging.getLogger(__name__)


def read_schemas(connect: Connector, config: SchemaFilterConfig) -> SchemasResult:
    """Read the schemas of ``config.database`` matching the configured filters.

    Opens a transaction on the database, runs the filtered catalog query and
    rolls the transaction back before returning or raising.

    Args:
        connect: Callable returning a DB-API connection for a database name.
        config: Filter configuration for this read.

    Returns:
        SchemasResult with the schema names and the configuration identifier.

    Raises:
        TransactionError: If the transaction cannot be opened.
        QueryExecutionError: If the query fails.
        ScanError: If a returned row cannot be decoded.

    Examples:
        Illustrative only; needs a reachable PostgreSQL server.

        >>> from schema_catalog.core.session import psycopg_connector
        >>> cfg = SchemaFilterConfig(database="appdb", like_any_patterns=["app_%"])
        >>> result = read_schemas(psycopg_connector("host=localhost"), cfg)
        >>> result.id
        "appdb_false_ANY (array['app_%'])_ALL (array[])_ALL (array[])_"
        >>> isinstance(result.schemas, frozenset)
        True
    """
    with start_transaction(connect, config.database) as txn:
        names = read_schema_names(txn, config)

    return SchemasResult(
        id=generate_schemas_id(config, config.database),
        database=config.database,
        names=tuple(names),
    )
