"""Schema catalog query composition public API.

Exposes the pieces used by the data source read and the CLI. The base
catalog queries live in ``catalog``, filter clauses in ``patterns``,
composition in ``plan``, row scanning in ``scan`` and configuration
identifiers in ``identity``.
"""

from .catalog import BaseQuery, base_query_for
from .patterns import FilterClause, build_clause, build_filter_clauses, pattern_array_string, regex_clause
from .plan import ComposedQuery, build_query, compose_query
from .scan import read_schema_names, scan_schema_name
from .identity import generate_schemas_id
from .materialize import materialize_result, schemas_frame

__all__ = [
    "BaseQuery",
    "base_query_for",
    "FilterClause",
    "build_clause",
    "build_filter_clauses",
    "pattern_array_string",
    "regex_clause",
    "ComposedQuery",
    "build_query",
    "compose_query",
    "read_schema_names",
    "scan_schema_name",
    "generate_schemas_id",
    "materialize_result",
    "schemas_frame",
]
