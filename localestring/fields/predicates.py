"""Predicates spanning a pair of child fields.

Each logical value is split into one part per child; the parts are compared
column by column inside nested groups:

- ``where``: ``(a op x AND b op y)``; a missing part becomes ``IS [NOT] NULL``
  under ``=`` and ``<>`` and is left out for every other operator
- ``where_null``: ``(a IS [NOT] NULL AND b IS [NOT] NULL)``
- ``where_in``: ``((a = x1 AND b = y1) OR (a = x2 AND b = y2) ...)``
- ``where_in`` with ``not_in``: ``((a <> x1 AND b <> y1) AND (a <> x2 AND b <> y2) ...)``
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..domain.interfaces.enums import Boolean, Operator
from ..domain.interfaces.field import B, BaseField

Pair = tuple[BaseField, BaseField]
Parts = tuple[Any, Any]


def _compare_pair(builder: B, fields: Pair, operator: Operator | str, parts: Parts) -> B:
    operator = Operator.coerce(operator)
    for field, part in zip(fields, parts):
        # A missing part only constrains its column under = and <>.
        if part is None and operator not in (Operator.EQUAL, Operator.DIFFERENT):
            continue
        field.where(builder, operator, part, Boolean.AND)
    return builder


def where_pair(
    builder: B,
    fields: Pair,
    operator: Operator | str,
    parts: Parts,
    boolean: Boolean | str = Boolean.AND,
) -> B:
    return builder.where(lambda sub: _compare_pair(sub, fields, operator, parts), boolean=boolean)


def where_null_pair(
    builder: B,
    fields: Pair,
    boolean: Boolean | str = Boolean.AND,
    not_: bool = False,
) -> B:
    # Negated at the leaves; both polarities join the children with AND.
    def group(sub: B) -> None:
        for field in fields:
            field.where_null(sub, Boolean.AND, not_)

    return builder.where(group, boolean=boolean)


def where_in_pairs(
    builder: B,
    fields: Pair,
    candidates: Sequence[Parts],
    boolean: Boolean | str = Boolean.AND,
    not_in: bool = False,
) -> B:
    if not candidates:
        # Nothing to compare against: an empty IN never matches, an empty NOT IN always does.
        return fields[0].where_in(builder, [], boolean, not_in)

    operator = Operator.DIFFERENT if not_in else Operator.EQUAL
    # A row is excluded only if it differs from every candidate.
    joiner = Boolean.AND if not_in else Boolean.OR

    def group(sub: B) -> None:
        for parts in candidates:
            sub.where(
                lambda inner, parts=parts: _compare_pair(inner, fields, operator, parts),
                boolean=joiner,
            )

    return builder.where(group, boolean=boolean)
