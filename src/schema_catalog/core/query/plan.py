from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from schema_catalog.core.enums import SystemSchemas
from schema_catalog.core.models import SchemaFilterConfig
from .catalog import BaseQuery, base_query_for
from .patterns import FilterClause, build_filter_clauses


@dataclass(frozen=True)
class ComposedQuery:
    """A base query with zero or more filter clauses appended."""

    base: BaseQuery
    clauses: Tuple[FilterClause, ...] = ()

    @property
    def concat_keyword(self) -> str:
        """Keyword joining the clauses to the base query."""
        return "AND" if self.base.has_predicate else "WHERE"

    def to_literal(self) -> str:
        """Query text with all values inlined. Meant for display and logging."""
        text = self.base.to_literal()
        if not self.clauses:
            return text
        joined = " AND ".join(c.to_literal() for c in self.clauses)
        return f"{text} {self.concat_keyword} {joined}"

    def to_sql(self) -> Tuple[str, List[Any]]:
        """Query text with ``%s`` placeholders and the parameters to bind."""
        sql, params = self.base.to_sql()
        if not self.clauses:
            return sql, params
        fragments: List[str] = []
        for c in self.clauses:
            fragment, values = c.to_sql()
            fragments.append(fragment)
            params.extend(values)
        return f"{sql} {self.concat_keyword} " + " AND ".join(fragments), params

    @property
    def sql(self) -> str:
        return self.to_sql()[0]

    @property
    def params(self) -> List[Any]:
        return self.to_sql()[1]


def compose_query(base: BaseQuery, clauses: Sequence[FilterClause]) -> ComposedQuery:
    """Append clauses to a base query.

    Clauses keep the order they are given in. With no clauses the result
    renders exactly as the base query.
    """
    return ComposedQuery(base=base, clauses=tuple(clauses))


def build_query(config: SchemaFilterConfig) -> ComposedQuery:
    """Pick the base variant for a config and append its filter clauses."""
    base = base_query_for(SystemSchemas.from_flag(config.include_system_schemas))
    return compose_query(base, build_filter_clauses(config))
