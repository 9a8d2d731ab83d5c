"""
Query description for the observation table.

Routers and services describe what they need as a TrendQuery (projection,
filters, OR groups, ordering) and hand it to a repository. The Postgres
repository renders it to SQL with to_sql(); the in-memory repository
evaluates the same description with matches() and sort_rows(), so both
stores agree on null handling and ordering.

Null semantics follow SQL: a comparison against NULL never matches, and
ORDER BY puts NULLs last when ascending and first when descending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .core.types import OBSERVATION_COLUMNS

# Operators understood by both renderers
OPERATORS = ("contains", "iequals", "eq", "neq", "gt", "lt", "not_null")


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user input is matched literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _check_column(column: str) -> str:
    if column not in OBSERVATION_COLUMNS:
        raise ValueError(f"Unknown column: {column}")
    return column


@dataclass(frozen=True)
class Condition:
    """A single column predicate."""

    column: str
    op: str
    value: Any = None

    def __post_init__(self) -> None:
        _check_column(self.column)
        if self.op not in OPERATORS:
            raise ValueError(f"Unknown operator: {self.op}")

    def to_sql(self) -> tuple[str, list[Any]]:
        col = self.column
        if self.op == "contains":
            return f"{col} ILIKE %s ESCAPE '\\'", [f"%{escape_like(self.value)}%"]
        if self.op == "iequals":
            return f"{col} ILIKE %s ESCAPE '\\'", [escape_like(self.value)]
        if self.op == "not_null":
            return f"{col} IS NOT NULL", []
        sql_op = {"eq": "=", "neq": "<>", "gt": ">", "lt": "<"}[self.op]
        return f"{col} {sql_op} %s", [self.value]

    def matches(self, row: dict[str, Any]) -> bool:
        current = row.get(self.column)
        if current is None:
            return False
        if self.op == "not_null":
            return True
        if self.op == "contains":
            return str(self.value).lower() in str(current).lower()
        if self.op == "iequals":
            return str(current).lower() == str(self.value).lower()
        if self.op == "eq":
            return current == self.value
        if self.op == "neq":
            return current != self.value
        if self.op == "gt":
            return current > self.value
        return current < self.value


@dataclass
class TrendQuery:
    """Chainable description of a read against the observation table.

    Example:
        >>> query = (
        ...     TrendQuery.select("player_name", "adds")
        ...     .not_null("adds")
        ...     .order_by("adds", ascending=False)
        ... )
        >>> sql, params = query.to_sql("nfl_fantasy_trends")
    """

    columns: tuple[str, ...] = ()
    conditions: list[Condition] = field(default_factory=list)
    any_of: list[tuple[Condition, ...]] = field(default_factory=list)
    ordering: list[tuple[str, bool]] = field(default_factory=list)

    @classmethod
    def select(cls, *columns: str) -> "TrendQuery":
        """Start a query projecting ``columns`` (all columns when empty)."""
        return cls(columns=tuple(_check_column(c) for c in columns))

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def contains(self, column: str, text: str) -> "TrendQuery":
        """Case-insensitive substring match."""
        self.conditions.append(Condition(column, "contains", text))
        return self

    def iequals(self, column: str, text: str) -> "TrendQuery":
        """Case-insensitive exact match."""
        self.conditions.append(Condition(column, "iequals", text))
        return self

    def eq(self, column: str, value: Any) -> "TrendQuery":
        self.conditions.append(Condition(column, "eq", value))
        return self

    def gt(self, column: str, value: Any) -> "TrendQuery":
        self.conditions.append(Condition(column, "gt", value))
        return self

    def lt(self, column: str, value: Any) -> "TrendQuery":
        self.conditions.append(Condition(column, "lt", value))
        return self

    def not_null(self, column: str) -> "TrendQuery":
        self.conditions.append(Condition(column, "not_null"))
        return self

    def or_(self, *conditions: Condition) -> "TrendQuery":
        """Require at least one of ``conditions`` to hold."""
        if not conditions:
            raise ValueError("or_() needs at least one condition")
        self.any_of.append(tuple(conditions))
        return self

    def any_nonzero(self, columns: Iterable[str]) -> "TrendQuery":
        """Require a non-zero (and non-null) value in at least one column."""
        return self.or_(*(Condition(c, "neq", 0) for c in columns))

    def order_by(self, column: str, ascending: bool = True) -> "TrendQuery":
        self.ordering.append((_check_column(column), ascending))
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_sql(self, table: str) -> tuple[str, tuple[Any, ...]]:
        """Render to a psycopg query string and parameter tuple."""
        params: list[Any] = []
        clauses: list[str] = []

        for condition in self.conditions:
            sql, values = condition.to_sql()
            clauses.append(sql)
            params.extend(values)

        for group in self.any_of:
            parts = []
            for condition in group:
                sql, values = condition.to_sql()
                parts.append(sql)
                params.extend(values)
            clauses.append("(" + " OR ".join(parts) + ")")

        columns_str = ", ".join(self.columns) if self.columns else "*"
        query = f"SELECT {columns_str} FROM {table}"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        if self.ordering:
            query += " ORDER BY " + ", ".join(
                f"{col} {'ASC' if asc else 'DESC'}" for col, asc in self.ordering
            )
        return query, tuple(params)

    # ------------------------------------------------------------------
    # In-process evaluation
    # ------------------------------------------------------------------

    def matches(self, row: dict[str, Any]) -> bool:
        if not all(c.matches(row) for c in self.conditions):
            return False
        return all(any(c.matches(row) for c in group) for group in self.any_of)

    def sort_rows(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Order rows the way Postgres would for this query's ORDER BY."""
        ordered = list(rows)
        # Stable sorts applied from the least significant key up
        for column, ascending in reversed(self.ordering):
            ordered.sort(
                key=lambda r, c=column: (r.get(c) is None, _sort_value(r.get(c))),
                reverse=not ascending,
            )
        return ordered

    def project(self, row: dict[str, Any]) -> dict[str, Any]:
        if not self.columns:
            return dict(row)
        return {c: row.get(c) for c in self.columns}


def _sort_value(value: Optional[Any]) -> Any:
    # Nulls are already split off by the first tuple element
    return 0 if value is None else value
