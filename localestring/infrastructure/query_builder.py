"""In-memory query builder producing parameterised SQL.

Conditions are kept as a tree so callers can inspect how predicates were
grouped. Each condition remembers the boolean joining it to the previous
sibling; the boolean of the first condition in a group is not rendered.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from localestring.domain.interfaces.enums import Boolean, Operator

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


@dataclass(frozen=True)
class Comparison:
    column: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class NullCheck:
    column: str
    negated: bool = False


@dataclass(frozen=True)
class InList:
    column: str
    values: tuple[Any, ...]
    negated: bool = False


@dataclass
class Group:
    conditions: list["Condition"] = field(default_factory=list)


Node = Union[Comparison, NullCheck, InList, Group]


@dataclass(frozen=True)
class Condition:
    boolean: Boolean
    node: Node


class QueryBuilder:
    """Mutable WHERE clause builder.

    >>> qb = QueryBuilder("people").where("lastname", "=", "Doe")
    >>> qb.to_sql()
    ('lastname = ?', ['Doe'])
    """

    def __init__(self, table: str | None = None) -> None:
        self.table = _identifier(table) if table is not None else None
        self.wheres: list[Condition] = []

    def _push(self, boolean: Boolean | str, node: Node) -> "QueryBuilder":
        self.wheres.append(Condition(Boolean.coerce(boolean), node))
        return self

    def new_query(self) -> "QueryBuilder":
        return type(self)(self.table)

    def where(
        self,
        column: str | Callable[["QueryBuilder"], Any],
        operator: Operator | str | None = None,
        value: Any = None,
        boolean: Boolean | str = Boolean.AND,
    ) -> "QueryBuilder":
        if callable(column):
            nested = self.new_query()
            column(nested)
            return self._push(boolean, Group(nested.wheres))
        if operator is None:
            raise ValueError(f"Missing operator for column {column!r}")
        return self._push(boolean, Comparison(_identifier(column), Operator.coerce(operator), value))

    def or_where(
        self,
        column: str | Callable[["QueryBuilder"], Any],
        operator: Operator | str | None = None,
        value: Any = None,
    ) -> "QueryBuilder":
        return self.where(column, operator, value, Boolean.OR)

    def where_null(
        self, column: str, boolean: Boolean | str = Boolean.AND, not_: bool = False
    ) -> "QueryBuilder":
        return self._push(boolean, NullCheck(_identifier(column), not_))

    def where_not_null(self, column: str, boolean: Boolean | str = Boolean.AND) -> "QueryBuilder":
        return self.where_null(column, boolean, True)

    def where_in(
        self,
        column: str,
        values: Iterable[Any],
        boolean: Boolean | str = Boolean.AND,
        not_: bool = False,
    ) -> "QueryBuilder":
        return self._push(boolean, InList(_identifier(column), tuple(values), not_))

    def where_not_in(
        self, column: str, values: Iterable[Any], boolean: Boolean | str = Boolean.AND
    ) -> "QueryBuilder":
        return self.where_in(column, values, boolean, True)

    # Rendering

    def to_sql(self) -> tuple[str, list[Any]]:
        """Render the WHERE clause body (without the keyword)."""
        params: list[Any] = []
        sql = _render_conditions(self.wheres, params)
        return sql, params

    def select_sql(self, columns: Sequence[str] = ("*",)) -> tuple[str, list[Any]]:
        if self.table is None:
            raise ValueError("Cannot select without a table")
        cols = ", ".join(c if c == "*" else _identifier(c) for c in columns)
        where, params = self.to_sql()
        sql = f"SELECT {cols} FROM {self.table}"
        if where:
            sql += f" WHERE {where}"
        return sql, params


def _render_conditions(conditions: Sequence[Condition], params: list[Any]) -> str:
    out: list[str] = []
    for condition in conditions:
        fragment = _render_node(condition.node, params)
        if not fragment:
            continue
        if out:
            out.append(condition.boolean.value.upper())
        out.append(fragment)
    return " ".join(out)


def _render_node(node: Node, params: list[Any]) -> str:
    match node:
        case Group(conditions=conditions):
            inner = _render_conditions(conditions, params)
            return f"({inner})" if inner else ""
        case NullCheck(column=column, negated=negated):
            return f"{column} IS NOT NULL" if negated else f"{column} IS NULL"
        case InList(column=column, values=values, negated=negated):
            if not values:
                return "1 = 1" if negated else "0 = 1"
            params.extend(values)
            marks = ", ".join("?" for _ in values)
            return f"{column} {'NOT IN' if negated else 'IN'} ({marks})"
        case Comparison(column=column, operator=operator, value=value):
            params.append(value)
            return f"{column} {operator.value} ?"
    raise TypeError(f"Unknown condition node: {node!r}")
