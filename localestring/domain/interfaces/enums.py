"""Enum definitions for the interfaces layer."""

from enum import StrEnum


class Operator(StrEnum):
    """Comparison operators understood by the query builder.

    >>> Operator.coerce("=") is Operator.EQUAL
    True
    """

    EQUAL = "="
    DIFFERENT = "<>"
    INFERIOR = "<"
    INFERIOR_OR_EQUAL = "<="
    SUPERIOR = ">"
    SUPERIOR_OR_EQUAL = ">="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"

    @classmethod
    def coerce(cls, value: "Operator | str") -> "Operator":
        if isinstance(value, Operator):
            return value
        normalized = str(value).strip().upper()
        if normalized == "!=":
            return cls.DIFFERENT
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown operator: {value!r}") from None


class Boolean(StrEnum):
    """How a condition is joined to its preceding sibling."""

    AND = "and"
    OR = "or"

    @classmethod
    def coerce(cls, value: "Boolean | str") -> "Boolean":
        if isinstance(value, Boolean):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown boolean: {value!r}") from None
