from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..domain.errors import ConfigurationError, TypeCoercionError
from ..domain.interfaces.context import LocaleContext
from ..domain.interfaces.enums import Boolean, Operator
from ..domain.interfaces.field import B, BaseField, Record
from ..domain.value_objects.templates import FieldTemplate
from ..logging_config import FieldStats
from .base import coerce_string
from .composed import BaseComposed
from .predicates import Parts, where_in_pairs, where_null_pair, where_pair
from .registry import ChildFieldMap

SEPARATOR = " "


class SplitName(BaseComposed):
    """A full name stored as two columns.

    ``"Doe Jane"`` is split on the first run of whitespace: the first token
    goes to the first child (``lastname``), the remainder to the second
    (``firstname``). Reads join the two parts back.

    >>> name = SplitName.of(name="name")
    >>> name.split("Doe Jane")
    ('Doe', 'Jane')
    """

    field_type = "split_name"

    def __init__(
        self,
        name: str,
        fields: ChildFieldMap,
        *,
        hidden: bool = False,
        stats: FieldStats | None = None,
    ) -> None:
        if len(fields) != 2:
            raise ConfigurationError(
                f"Split field {name!r} needs exactly two children, got {list(fields)}"
            )
        super().__init__(name, fields, hidden=hidden, stats=stats)
        self.first_key, self.second_key = self.fields.keys()

    @classmethod
    def of(
        cls,
        template: FieldTemplate | str | None = None,
        *,
        name: str,
        keys: Iterable[str] | None = None,
        pattern: str | None = None,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
        **kwargs: Any,
    ) -> "SplitName":
        from ..config.field_properties import get_field_properties

        props = get_field_properties(cls.field_type)
        if template is None:
            template = props.template
        elif isinstance(template, str):
            template = FieldTemplate(type=template)
        return cls.from_template(  # type: ignore[return-value]
            name,
            template,
            props.keys if keys is None else keys,
            pattern=pattern or props.pattern,
            overrides=overrides,
            **kwargs,
        )

    @property
    def pair(self) -> tuple[BaseField, BaseField]:
        return self.get_field(self.first_key), self.get_field(self.second_key)

    @staticmethod
    def split(value: Any) -> Parts:
        if value is None:
            raise TypeCoercionError("Cannot split a null name")
        parts = coerce_string(value).split(None, 1)
        if not parts:
            return None, None
        if len(parts) == 1:
            return parts[0], None
        return parts[0], parts[1]

    @staticmethod
    def join(first: Any, second: Any) -> str | None:
        parts = [str(p) for p in (first, second) if p is not None and p != ""]
        return SEPARATOR.join(parts) if parts else None

    def set(self, record: Record, value: Any, ctx: LocaleContext | None = None) -> bool:
        first, second = (None, None) if value is None else self.split(value)
        first_field, second_field = self.pair
        # Both parts are cast before either is written.
        first, second = first_field.cast(first), second_field.cast(second)
        first_ok = first_field.set(record, first)
        second_ok = second_field.set(record, second)
        return first_ok and second_ok

    def resolve(self, record: Record, ctx: LocaleContext | None = None) -> str | None:
        first_field, second_field = self.pair
        return self.join(first_field.get(record), second_field.get(record))

    def where(
        self,
        builder: B,
        operator: Operator | str,
        value: Any = None,
        boolean: Boolean | str = Boolean.AND,
        ctx: LocaleContext | None = None,
    ) -> B:
        """Compare both parts of ``value`` inside one group.

        With a single-token value such as ``"Doe%"`` only the first column is
        constrained for operators other than ``=`` and ``<>``.
        """
        return where_pair(builder, self.pair, operator, self.split(value), boolean)

    def where_null(
        self,
        builder: B,
        boolean: Boolean | str = Boolean.AND,
        not_: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B:
        return where_null_pair(builder, self.pair, boolean, not_)

    def where_in(
        self,
        builder: B,
        values: Iterable[Any],
        boolean: Boolean | str = Boolean.AND,
        not_in: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B:
        candidates = [self.split(value) for value in values]
        return where_in_pairs(builder, self.pair, candidates, boolean, not_in)
