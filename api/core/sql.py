"""
Parameterized SQL fragment builders.

Two builders live here:
- `build_where_clause` turns optional search criteria into a `WHERE ... AND ...`
  fragment plus its bind values.
- `sql_for_partial_update` turns a partial payload into a `SET` column list
  plus its bind values.

Values never end up in SQL text. Column identifiers are interpolated, so they
must come from a vocabulary declared in code (a `Criterion` tuple or a
translation table), never from request data.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Sequence

from .errors import BadRequestError


@dataclass(frozen=True)
class SqlFragment:
    sql: str
    values: tuple[Any, ...] = ()

    @property
    def next_placeholder(self) -> str:
        """
        Placeholder for the first value a caller appends after this fragment.
        """
        return f"${len(self.values) + 1}"


@dataclass(frozen=True)
class WhereClause:
    """
    Immutable accumulator for filter predicates.

    `predicate_count` and `values` advance independently: a literal predicate
    (e.g. `equity > 0`) counts as a predicate but consumes no placeholder.
    """

    sql: str = ""
    values: tuple[Any, ...] = ()
    predicate_count: int = 0

    def _keyword(self) -> str:
        return "WHERE" if self.predicate_count == 0 else "AND"

    def add(self, template: str, value: Any) -> WhereClause:
        """
        Append a predicate with one bind value.

        `template` contains `{p}` where the placeholder goes, e.g.
        "salary >= {p}". The index is taken from the live value count.
        """
        placeholder = f"${len(self.values) + 1}"
        predicate = template.format(p=placeholder)
        return replace(
            self,
            sql=f"{self.sql} {self._keyword()} {predicate}",
            values=self.values + (value,),
            predicate_count=self.predicate_count + 1,
        )

    def add_literal(self, predicate: str) -> WhereClause:
        return replace(
            self,
            sql=f"{self.sql} {self._keyword()} {predicate}",
            predicate_count=self.predicate_count + 1,
        )

    def to_fragment(self) -> SqlFragment:
        return SqlFragment(sql=self.sql, values=self.values)


CONTAINS = "contains"
AT_LEAST = "at_least"
AT_MOST = "at_most"
POSITIVE = "positive"


@dataclass(frozen=True)
class Criterion:
    """
    One recognized filter: which input key feeds which column, and how.
    """

    key: str
    column: str
    kind: str

    def apply(self, clause: WhereClause, value: Any) -> WhereClause:
        if self.kind == CONTAINS:
            return clause.add(f"LOWER({self.column}) LIKE LOWER({{p}})", f"%{value}%")
        if self.kind == AT_LEAST:
            return clause.add(f"{self.column} >= {{p}}", value)
        if self.kind == AT_MOST:
            return clause.add(f"{self.column} <= {{p}}", value)
        if self.kind == POSITIVE:
            # Flag only; false means "no constraint".
            if not value:
                return clause
            return clause.add_literal(f"{self.column} > 0")
        raise ValueError(f"Unknown criterion kind: {self.kind}")


def build_where_clause(criteria: Mapping[str, Any], vocabulary: Sequence[Criterion]) -> SqlFragment:
    """
    Build the filter fragment for `criteria`, testing keys in `vocabulary` order.

    Keys that are missing or None are skipped; keys not in the vocabulary are
    ignored. Returns an empty fragment when nothing applies, so the result can
    always be appended between `FROM <table>` and `ORDER BY`.

        >>> build_where_clause(
        ...     {"minEmployees": 10},
        ...     [Criterion("minEmployees", "num_employees", AT_LEAST)],
        ... )
        SqlFragment(sql=' WHERE num_employees >= $1', values=(10,))
    """
    clause = WhereClause()
    for criterion in vocabulary:
        value = criteria.get(criterion.key)
        if value is None:
            continue
        clause = criterion.apply(clause, value)
    return clause.to_fragment()


def sql_for_partial_update(
    data: Mapping[str, Any],
    column_names: Mapping[str, str] | None = None,
) -> SqlFragment:
    """
    Build the `SET` list for a partial update.

    {"firstName": "Aliya", "age": 32} with {"firstName": "first_name"} gives
    SqlFragment('"first_name"=$1, "age"=$2', ("Aliya", 32)).

    Raises BadRequestError when `data` is empty. Keys are not checked here;
    callers pass payloads already restricted by their update schema.
    """
    if not data:
        raise BadRequestError("No data")

    column_names = column_names or {}
    assignments = [
        f'"{column_names.get(key, key)}"=${idx}'
        for idx, key in enumerate(data, start=1)
    ]
    return SqlFragment(sql=", ".join(assignments), values=tuple(data.values()))
