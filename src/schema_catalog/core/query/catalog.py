from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from schema_catalog.core.enums import SystemSchemas
from .patterns import NOT_LIKE, FilterClause


SCHEMATA_HEAD = "SELECT schema_name FROM information_schema.schemata s"


@dataclass(frozen=True)
class BaseQuery:
    """Unfiltered catalog query: a SELECT head plus its built-in predicates."""

    head: str
    predicates: Tuple[FilterClause, ...] = ()

    @property
    def has_predicate(self) -> bool:
        return bool(self.predicates)

    def to_literal(self) -> str:
        if not self.predicates:
            return self.head
        return f"{self.head} WHERE " + " AND ".join(p.to_literal() for p in self.predicates)

    def to_sql(self) -> Tuple[str, List[Any]]:
        if not self.predicates:
            return self.head, []
        fragments: List[str] = []
        params: List[Any] = []
        for p in self.predicates:
            fragment, values = p.to_sql()
            fragments.append(fragment)
            params.extend(values)
        return f"{self.head} WHERE " + " AND ".join(fragments), params


_BASE_QUERIES: Dict[SystemSchemas, BaseQuery] = {
    SystemSchemas.INCLUDE: BaseQuery(head=SCHEMATA_HEAD),
    SystemSchemas.EXCLUDE: BaseQuery(
        head=SCHEMATA_HEAD,
        predicates=(
            FilterClause(comparison=NOT_LIKE, value="pg_%"),
            FilterClause(comparison="s.schema_name <>", value="information_schema"),
        ),
    ),
}


def base_query_for(variant: SystemSchemas) -> BaseQuery:
    """Return the base catalog query for a system-schema variant.

    The exclude variant already filters out ``pg_*`` and ``information_schema``;
    ``public`` is never filtered.
    """
    return _BASE_QUERIES[SystemSchemas(variant)]
