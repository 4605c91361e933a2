"""Tests for filter clause construction."""

import pytest

from schema_catalog.core.enums import Quantifier
from schema_catalog.core.models import SchemaFilterConfig
from schema_catalog.core.query.patterns import (
    LIKE,
    NOT_LIKE,
    FilterClause,
    build_clause,
    build_filter_clauses,
    pattern_array_string,
    regex_clause,
)


def test_pattern_array_string_preserves_order():
    assert pattern_array_string(["b%", "a%"], Quantifier.ANY) == "ANY (array['b%','a%'])"
    assert pattern_array_string(["a%", "b%"], Quantifier.ALL) == "ALL (array['a%','b%'])"


def test_pattern_array_string_empty():
    assert pattern_array_string([], Quantifier.ANY) == "ANY (array[])"


def test_pattern_array_string_does_not_escape_quotes():
    """Values are only quote-wrapped; embedded quotes pass through as-is."""
    assert pattern_array_string(["o'brien"], Quantifier.ANY) == "ANY (array['o'brien'])"


def test_build_clause_literal_and_sql():
    clause = build_clause(LIKE, ["app_%", "test_%"], Quantifier.ANY)

    assert clause.to_literal() == "s.schema_name LIKE ANY (array['app_%','test_%'])"
    sql, params = clause.to_sql()
    assert sql == "s.schema_name LIKE ANY (%s)"
    assert params == [["app_%", "test_%"]]


def test_build_clause_rejects_empty_patterns():
    with pytest.raises(ValueError, match="No patterns"):
        build_clause(LIKE, [], Quantifier.ALL)


def test_regex_clause_is_scalar():
    clause = regex_clause("^app_[0-9]+$")

    assert clause.quantifier is None
    assert clause.to_literal() == "s.schema_name ~ '^app_[0-9]+$'"
    assert clause.to_sql() == ("s.schema_name ~ %s", ["^app_[0-9]+$"])


def test_regex_clause_rejects_empty():
    with pytest.raises(ValueError):
        regex_clause("")


def test_filter_clause_is_immutable():
    clause = FilterClause(comparison=NOT_LIKE, value=("a",), quantifier=Quantifier.ALL)
    with pytest.raises(AttributeError):
        clause.comparison = "other"  # type: ignore[misc]


def test_build_filter_clauses_empty_config(base_config):
    assert build_filter_clauses(base_config) == []


def test_build_filter_clauses_fixed_order(full_config):
    literals = [c.to_literal() for c in build_filter_clauses(full_config)]

    assert literals == [
        "s.schema_name LIKE ANY (array['app_%','test_%'])",
        "s.schema_name LIKE ALL (array['%_v2'])",
        "s.schema_name NOT LIKE ALL (array['%_tmp','%_old'])",
        "s.schema_name ~ '^[a-z_0-9]+$'",
    ]


@pytest.mark.parametrize(
    "config, expected",
    [
        (SchemaFilterConfig(database="db", like_all_patterns=["a%"]), ["s.schema_name LIKE ALL"]),
        (
            SchemaFilterConfig(database="db", not_like_all_patterns=["a%"], regex_pattern="x"),
            ["s.schema_name NOT LIKE ALL", "s.schema_name ~"],
        ),
        (
            SchemaFilterConfig(database="db", like_any_patterns=["a%"], regex_pattern="x"),
            ["s.schema_name LIKE ANY", "s.schema_name ~"],
        ),
    ],
    ids=["like_all_only", "not_like_and_regex", "like_any_and_regex"],
)
def test_build_filter_clauses_skips_empty_categories(config, expected):
    literals = [c.to_literal() for c in build_filter_clauses(config)]

    assert len(literals) == len(expected)
    for literal, prefix in zip(literals, expected):
        assert literal.startswith(prefix)
