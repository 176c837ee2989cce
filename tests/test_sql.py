from __future__ import annotations

import re
from itertools import combinations

import pytest

from companies.repository import COMPANY_FILTERS
from core.errors import BadRequestError
from core.sql import (
    AT_LEAST,
    POSITIVE,
    Criterion,
    WhereClause,
    build_where_clause,
    sql_for_partial_update,
)
from jobs.repository import JOB_FILTERS

COMPANY_VALUES = {"name": "net", "minEmployees": 10, "maxEmployees": 500}


def test_where_clause_empty_when_no_criteria() -> None:
    fragment = build_where_clause({}, COMPANY_FILTERS)
    assert fragment.sql == ""
    assert fragment.values == ()


def test_where_clause_ignores_none_and_unknown_keys() -> None:
    fragment = build_where_clause({"name": None, "color": "red"}, COMPANY_FILTERS)
    assert fragment.sql == ""
    assert fragment.values == ()


@pytest.mark.parametrize(
    "keys",
    [subset for size in range(1, 4) for subset in combinations(COMPANY_VALUES, size)],
)
def test_where_clause_first_predicate_uses_where(keys: tuple[str, ...]) -> None:
    fragment = build_where_clause({key: COMPANY_VALUES[key] for key in keys}, COMPANY_FILTERS)

    assert fragment.sql.count(" WHERE ") == 1
    assert fragment.sql.startswith(" WHERE ")
    assert fragment.sql.count(" AND ") == len(keys) - 1
    placeholders = re.findall(r"\$(\d+)", fragment.sql)
    assert placeholders == [str(i) for i in range(1, len(keys) + 1)]
    assert len(fragment.values) == len(keys)


def test_where_clause_numbers_from_one_when_earlier_criteria_absent() -> None:
    fragment = build_where_clause({"maxEmployees": 10}, COMPANY_FILTERS)
    assert fragment.sql == " WHERE num_employees <= $1"
    assert fragment.values == (10,)


def test_where_clause_wraps_substring_in_wildcards() -> None:
    fragment = build_where_clause({"name": "net", "minEmployees": 50}, COMPANY_FILTERS)
    assert fragment.sql == " WHERE LOWER(name) LIKE LOWER($1) AND num_employees >= $2"
    assert fragment.values == ("%net%", 50)


def test_where_clause_treats_zero_as_a_bound() -> None:
    fragment = build_where_clause({"minEmployees": 0}, COMPANY_FILTERS)
    assert fragment.sql == " WHERE num_employees >= $1"
    assert fragment.values == (0,)


def test_positive_flag_adds_literal_without_bind_value() -> None:
    fragment = build_where_clause({"title": "eng", "minSalary": 1000, "hasEquity": True}, JOB_FILTERS)
    assert fragment.sql == " WHERE LOWER(title) LIKE LOWER($1) AND salary >= $2 AND equity > 0"
    assert fragment.values == ("%eng%", 1000)


def test_positive_flag_alone_uses_where() -> None:
    fragment = build_where_clause({"hasEquity": True}, JOB_FILTERS)
    assert fragment.sql == " WHERE equity > 0"
    assert fragment.values == ()


def test_positive_flag_false_adds_nothing() -> None:
    fragment = build_where_clause({"hasEquity": False}, JOB_FILTERS)
    assert fragment.sql == ""


def test_placeholder_after_literal_predicate_does_not_skip_an_index() -> None:
    vocabulary = (
        Criterion("hasEquity", "equity", POSITIVE),
        Criterion("minSalary", "salary", AT_LEAST),
    )
    fragment = build_where_clause({"hasEquity": True, "minSalary": 100}, vocabulary)
    assert fragment.sql == " WHERE equity > 0 AND salary >= $1"
    assert fragment.values == (100,)


def test_where_clause_accumulator_is_immutable() -> None:
    empty = WhereClause()
    first = empty.add("a = {p}", 1)
    second = first.add_literal("b > 0")

    assert empty == WhereClause()
    assert first.sql == " WHERE a = $1"
    assert second.sql == " WHERE a = $1 AND b > 0"
    assert second.predicate_count == 2
    assert second.values == (1,)


def test_unknown_criterion_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_where_clause({"x": 1}, (Criterion("x", "x", "between"),))


def test_partial_update_translates_names_in_input_order() -> None:
    fragment = sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
    assert fragment.sql == '"first_name"=$1, "age"=$2'
    assert fragment.values == ("Aliya", 32)


@pytest.mark.parametrize("size", [1, 2, 5])
def test_partial_update_placeholders_and_key_index(size: int) -> None:
    data = {f"field{i}": i for i in range(size)}
    fragment = sql_for_partial_update(data)

    assert re.findall(r"\$(\d+)", fragment.sql) == [str(i) for i in range(1, size + 1)]
    assert fragment.sql.count(", ") == size - 1
    assert fragment.values == tuple(range(size))
    assert fragment.next_placeholder == f"${size + 1}"


def test_partial_update_rejects_empty_payload() -> None:
    with pytest.raises(BadRequestError) as exc_info:
        sql_for_partial_update({})
    assert exc_info.value.detail == "No data"
    assert exc_info.value.status_code == 400
