from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union

from schema_catalog.core.enums import Quantifier
from schema_catalog.core.models import SchemaFilterConfig


LIKE = "s.schema_name LIKE"
NOT_LIKE = "s.schema_name NOT LIKE"
REGEX_MATCH = "s.schema_name ~"


def _quote(value: str) -> str:
    # Quote-wrapping only. Executed queries bind values as parameters instead.
    return f"'{value}'"


def pattern_array_string(patterns: Iterable[str], quantifier: Quantifier) -> str:
    """Render patterns as a quantified array literal.

    Examples:
        >>> pattern_array_string(["app_%", "test_%"], Quantifier.ANY)
        "ANY (array['app_%','test_%'])"
        >>> pattern_array_string([], Quantifier.ALL)
        'ALL (array[])'
    """
    joined = ",".join(_quote(p) for p in patterns)
    return f"{Quantifier(quantifier).value} (array[{joined}])"


@dataclass(frozen=True)
class FilterClause:
    """One boolean predicate on the schema name.

    ``quantifier`` is None for scalar comparisons (``value`` is a single
    string); otherwise ``value`` is the tuple of patterns compared against.
    """

    comparison: str
    value: Union[str, Tuple[str, ...]]
    quantifier: Optional[Quantifier] = None

    @property
    def quantified_expression(self) -> str:
        if self.quantifier is None:
            return _quote(str(self.value))
        return pattern_array_string(self.value, self.quantifier)

    def to_literal(self) -> str:
        """Predicate text with values inlined, e.g. ``s.schema_name LIKE ANY (array['a%'])``."""
        return f"{self.comparison} {self.quantified_expression}"

    def to_sql(self) -> Tuple[str, List[Any]]:
        """Predicate text with a ``%s`` placeholder and its bound parameter.

        Pattern arrays bind as a single list parameter, which PostgreSQL
        drivers adapt to an array.
        """
        if self.quantifier is None:
            return f"{self.comparison} %s", [self.value]
        return f"{self.comparison} {self.quantifier.value} (%s)", [list(self.value)]


def build_clause(comparison: str, patterns: Iterable[str], quantifier: Quantifier) -> FilterClause:
    """Build a quantified array predicate for a non-empty pattern list.

    Raises:
        ValueError: If ``patterns`` is empty; callers skip empty categories.
    """
    values = tuple(patterns)
    if not values:
        raise ValueError(f"No patterns given for '{comparison} {Quantifier(quantifier).value}'")
    return FilterClause(comparison=comparison, value=values, quantifier=Quantifier(quantifier))


def regex_clause(pattern: str) -> FilterClause:
    if not pattern:
        raise ValueError("Empty regex pattern")
    return FilterClause(comparison=REGEX_MATCH, value=pattern)


def build_filter_clauses(config: SchemaFilterConfig) -> List[FilterClause]:
    """Return the optional clauses for a config in their fixed order.

    Order: LIKE ANY, LIKE ALL, NOT LIKE ALL, regex. Empty categories are skipped.
    """
    clauses: List[FilterClause] = []
    if config.like_any_patterns:
        clauses.append(build_clause(LIKE, config.like_any_patterns, Quantifier.ANY))
    if config.like_all_patterns:
        clauses.append(build_clause(LIKE, config.like_all_patterns, Quantifier.ALL))
    if config.not_like_all_patterns:
        clauses.append(build_clause(NOT_LIKE, config.not_like_all_patterns, Quantifier.ALL))
    if config.regex_pattern:
        clauses.append(regex_clause(config.regex_pattern))
    return clauses
