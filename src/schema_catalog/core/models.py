"""Filter configuration and read result models.

This module defines the data passed into and out of a schema catalog read:
- SchemaFilterConfig: the full set of filter inputs for one read
- SchemasResult: schema names returned by a read plus its identifier
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Tuple


# Human readable descriptions for every input/output field.
FIELD_DESCRIPTIONS: Dict[str, str] = {
    "database": "The PostgreSQL database which will be queried for schema names",
    "include_system_schemas": (
        "Determines whether to include system schemas (pg_ prefix and information_schema). "
        "'public' will always be included."
    ),
    "like_any_patterns": (
        "Expression(s) which will be pattern matched in the query using the "
        "PostgreSQL LIKE ANY operator"
    ),
    "like_all_patterns": (
        "Expression(s) which will be pattern matched in the query using the "
        "PostgreSQL LIKE ALL operator"
    ),
    "not_like_all_patterns": (
        "Expression(s) which will be pattern matched in the query using the "
        "PostgreSQL NOT LIKE ALL operator"
    ),
    "regex_pattern": (
        "Expression which will be pattern matched in the query using the "
        "PostgreSQL ~ (regular expression match) operator"
    ),
    "schemas": "The list of PostgreSQL schemas retrieved by this data source",
}

PATTERN_LIST_FIELDS = ("like_any_patterns", "like_all_patterns", "not_like_all_patterns")
INPUT_FIELDS = ("database", "include_system_schemas", *PATTERN_LIST_FIELDS, "regex_pattern")


def _as_patterns(name: str, value: Iterable[str]) -> Tuple[str, ...]:
    """Freeze a pattern list into a tuple, rejecting anything but strings.

    A bare string is rejected rather than split into characters.
    """
    if isinstance(value, (str, bytes)):
        raise ValueError(f"'{name}' must be a list of strings")
    patterns = tuple(value)
    for item in patterns:
        if not isinstance(item, str):
            raise ValueError(f"'{name}' must contain only strings, got {type(item).__name__}")
    return patterns


@dataclass(frozen=True)
class SchemaFilterConfig:
    """Filter inputs for a single schema catalog read.

    Attributes:
        database: Database whose catalog is queried.
        include_system_schemas: Keep ``pg_*`` and ``information_schema`` in the result.
        like_any_patterns: Name must match at least one pattern (LIKE ANY).
        like_all_patterns: Name must match every pattern (LIKE ALL).
        not_like_all_patterns: Name must match none of the patterns (NOT LIKE ALL).
        regex_pattern: POSIX regular expression the name must match; empty disables it.

    Pattern order is preserved. It does not change which schemas match but it
    is part of the configuration identity.

    Raises:
        ValueError: If a pattern list is a bare string or holds non-string items.

    Examples:
        >>> cfg = SchemaFilterConfig(database="appdb", like_any_patterns=["app_%"])
        >>> cfg.like_any_patterns
        ('app_%',)
    """

    database: str
    include_system_schemas: bool = False
    like_any_patterns: Tuple[str, ...] = ()
    like_all_patterns: Tuple[str, ...] = ()
    not_like_all_patterns: Tuple[str, ...] = ()
    regex_pattern: str = ""

    def __post_init__(self) -> None:
        # Lists are frozen into tuples so the config stays hashable and immutable.
        for name in PATTERN_LIST_FIELDS:
            object.__setattr__(self, name, _as_patterns(name, getattr(self, name)))

    @property
    def has_filters(self) -> bool:
        """True if any optional pattern constraint is set."""
        return bool(
            self.like_any_patterns
            or self.like_all_patterns
            or self.not_like_all_patterns
            or self.regex_pattern
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SchemaFilterConfig":
        """Build a config from a plain mapping of field values.

        Missing optional fields take their defaults; ``None`` is treated as missing.

        Raises:
            ValueError: If ``database`` is missing/empty, a field has the wrong
                type, or an unknown field is present.
        """
        unknown = sorted(set(data) - set(INPUT_FIELDS))
        if unknown:
            raise ValueError(
                f"Unknown filter field(s): {', '.join(unknown)}. "
                f"Valid fields: {', '.join(INPUT_FIELDS)}"
            )

        database = data.get("database")
        if not isinstance(database, str) or not database:
            raise ValueError("'database' is required and must be a non-empty string")

        include = data.get("include_system_schemas")
        if include is None:
            include = False
        if not isinstance(include, bool):
            raise ValueError(
                f"'include_system_schemas' must be a boolean, got {type(include).__name__}"
            )

        lists: Dict[str, Tuple[str, ...]] = {}
        for name in PATTERN_LIST_FIELDS:
            value = data.get(name)
            if value is None:
                lists[name] = ()
                continue
            if not isinstance(value, (list, tuple)):
                raise ValueError(f"'{name}' must be a list of strings")
            lists[name] = _as_patterns(name, value)

        regex = data.get("regex_pattern")
        if regex is None:
            regex = ""
        if not isinstance(regex, str):
            raise ValueError(f"'regex_pattern' must be a string, got {type(regex).__name__}")

        return cls(
            database=database,
            include_system_schemas=include,
            regex_pattern=regex,
            **lists,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "database": self.database,
            "include_system_schemas": self.include_system_schemas,
            "like_any_patterns": list(self.like_any_patterns),
            "like_all_patterns": list(self.like_all_patterns),
            "not_like_all_patterns": list(self.not_like_all_patterns),
            "regex_pattern": self.regex_pattern,
        }


@dataclass(frozen=True)
class SchemasResult:
    """Outcome of a schema catalog read.

    Attributes:
        id: Identifier derived from the configuration that produced this result.
        database: Database that was read.
        names: Schema names in the order the database returned them.
    """

    id: str
    database: str
    names: Tuple[str, ...] = ()

    @property
    def schemas(self) -> FrozenSet[str]:
        """Unordered, de-duplicated set of schema names."""
        return frozenset(self.names)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "database": self.database,
            "schemas": sorted(self.schemas),
        }


__all__ = [
    "FIELD_DESCRIPTIONS",
    "INPUT_FIELDS",
    "PATTERN_LIST_FIELDS",
    "SchemaFilterConfig",
    "SchemasResult",
]
