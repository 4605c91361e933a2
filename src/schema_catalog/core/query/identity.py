from __future__ import annotations

from typing import Optional

from schema_catalog.core.enums import Quantifier
from schema_catalog.core.models import SchemaFilterConfig
from .patterns import pattern_array_string


ID_SEPARATOR = "_"


def generate_schemas_id(config: SchemaFilterConfig, database: Optional[str] = None) -> str:
    """Derive the stable identifier for a filter configuration.

    Fields are joined with ``_`` in a fixed order: database, system flag
    (``true``/``false``), LIKE ANY array, LIKE ALL array, NOT LIKE ALL array,
    regex. Pattern order is significant. Values containing ``_`` can make two
    different configurations produce the same identifier.

    Examples:
        >>> generate_schemas_id(SchemaFilterConfig(database="db"))
        'db_false_ANY (array[])_ALL (array[])_ALL (array[])_'
    """
    return ID_SEPARATOR.join(
        [
            config.database if database is None else database,
            "true" if config.include_system_schemas else "false",
            pattern_array_string(config.like_any_patterns, Quantifier.ANY),
            pattern_array_string(config.like_all_patterns, Quantifier.ALL),
            pattern_array_string(config.not_like_all_patterns, Quantifier.ALL),
            config.regex_pattern,
        ]
    )
