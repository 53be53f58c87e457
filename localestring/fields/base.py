from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..domain.errors import TypeCoercionError
from ..domain.interfaces.context import LocaleContext
from ..domain.interfaces.enums import Boolean, Operator
from ..domain.interfaces.field import B, BaseField, Record
from ..domain.value_objects.templates import FieldOptions, StringOptions
from .registry import register_field_type


def coerce_string(value: Any) -> str | None:
    """Stringify ``value`` for storage; ``None`` passes through.

    >>> coerce_string(12), coerce_string(None)
    ('12', None)
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TypeCoercionError(f"Cannot decode {value!r} as UTF-8 text") from exc
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        raise TypeCoercionError(f"Cannot convert {type(value).__name__} to a string")
    try:
        return str(value)
    except Exception as exc:
        raise TypeCoercionError(f"Cannot convert {type(value).__name__} to a string") from exc


class Field(BaseField):
    """Simple field stored in a single column of the record."""

    def __init__(
        self,
        name: str,
        *,
        column: str | None = None,
        hidden: bool = False,
        nullable: bool = True,
    ) -> None:
        super().__init__(name, hidden=hidden)
        self.column = column or name
        self.nullable = nullable

    def columns(self) -> list[str]:
        return [self.column]

    def get(self, record: Record, ctx: LocaleContext | None = None) -> Any:
        return self.get_owner().get_field_value(self, record)

    def set(self, record: Record, value: Any, ctx: LocaleContext | None = None) -> bool:
        value = self.cast(value)
        if value is None and not self.nullable:
            raise TypeCoercionError(f"Field {self.name!r} does not accept None")
        return self.get_owner().set_field_value(self, record, value)

    def dry(self, value: Any) -> Any:
        return value

    def hydrate(self, value: Any) -> Any:
        return value

    def serialize(self, value: Any, ctx: LocaleContext | None = None) -> Any:
        return value

    def cast(self, value: Any) -> Any:
        return value

    def where(
        self,
        builder: B,
        operator: Operator | str,
        value: Any = None,
        boolean: Boolean | str = Boolean.AND,
        ctx: LocaleContext | None = None,
    ) -> B:
        if value is None:
            operator = Operator.coerce(operator)
            if operator in (Operator.EQUAL, Operator.DIFFERENT):
                return builder.where_null(self.column, boolean, operator is Operator.DIFFERENT)
        return builder.where(self.column, operator, self.dry(value), boolean)

    def where_null(
        self,
        builder: B,
        boolean: Boolean | str = Boolean.AND,
        not_: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B:
        return builder.where_null(self.column, boolean, not_)

    def where_in(
        self,
        builder: B,
        values: Iterable[Any],
        boolean: Boolean | str = Boolean.AND,
        not_in: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B:
        return builder.where_in(self.column, [self.dry(v) for v in values], boolean, not_in)


class Text(Field):
    """Unbounded text column."""

    def dry(self, value: Any) -> str | None:
        return coerce_string(value)

    def hydrate(self, value: Any) -> str | None:
        return coerce_string(value)

    def cast(self, value: Any) -> str | None:
        return coerce_string(value)


class String(Text):
    """Text column limited to ``max_length`` characters."""

    def __init__(self, name: str, *, max_length: int = 255, **kwargs: Any) -> None:
        super().__init__(name, **kwargs)
        self.max_length = max_length

    def cast(self, value: Any) -> str | None:
        value = coerce_string(value)
        if value is not None and len(value) > self.max_length:
            raise TypeCoercionError(
                f"Value for {self.name!r} exceeds {self.max_length} characters"
            )
        return value


@register_field_type("field", FieldOptions)
def _make_field(name: str, column: str, options: FieldOptions) -> Field:
    return Field(name, column=column, hidden=options.hidden, nullable=options.nullable)


@register_field_type("text", FieldOptions)
def _make_text(name: str, column: str, options: FieldOptions) -> Text:
    return Text(name, column=column, hidden=options.hidden, nullable=options.nullable)


@register_field_type("string", StringOptions)
def _make_string(name: str, column: str, options: StringOptions) -> String:
    return String(
        name,
        column=column,
        hidden=options.hidden,
        nullable=options.nullable,
        max_length=options.max_length,
    )
