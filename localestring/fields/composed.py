from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from ..domain.errors import ConfigurationError
from ..domain.interfaces.context import LocaleContext, get_locale_context
from ..domain.interfaces.field import BaseField, Record
from ..domain.value_objects.templates import FieldTemplate
from ..logging_config import FieldStats
from .base import coerce_string
from .constraints import ConstraintKind, IndexableConstraints
from .registry import ChildFieldMap, build


class BaseComposed(BaseField):
    """Field made of named child fields.

    The composed field owns its children: they read and write through it, and
    it forwards to its own owner. Children are hidden and only reachable
    through the composed field.
    """

    field_type: ClassVar[str] = "composed"

    def __init__(
        self,
        name: str,
        fields: ChildFieldMap,
        *,
        hidden: bool = False,
        stats: FieldStats | None = None,
    ) -> None:
        super().__init__(name, hidden=hidden)
        if not fields:
            raise ConfigurationError(f"Composed field {name!r} needs at least one child")
        self._fields: ChildFieldMap = MappingProxyType(dict(fields))
        for child in self._fields.values():
            child.own(self)
        self.constraints = IndexableConstraints()
        self.stats = stats

    @classmethod
    def from_template(
        cls,
        name: str,
        template: FieldTemplate,
        keys: Iterable[str],
        *,
        pattern: str | None = None,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
        **kwargs: Any,
    ) -> "BaseComposed":
        fields = build(template, keys, name=name, pattern=pattern, overrides=overrides)
        return cls(name, fields, **kwargs)

    @property
    def fields(self) -> ChildFieldMap:
        return self._fields

    def has_field(self, key: str) -> bool:
        return key in self._fields

    def get_field(self, key: str) -> BaseField:
        try:
            return self._fields[key]
        except KeyError:
            raise ConfigurationError(f"Composed field {self.name!r} has no child {key!r}") from None

    def columns(self) -> list[str]:
        return [column for child in self._fields.values() for column in child.columns()]

    def leaves(self) -> list[BaseField]:
        return [leaf for child in self._fields.values() for leaf in child.leaves()]

    @staticmethod
    def _context(ctx: LocaleContext | None) -> LocaleContext:
        # Read on every call: concurrent requests may carry different locales.
        return ctx if ctx is not None else get_locale_context()

    # Owner of the children

    def get_field_value(self, field: BaseField, record: Record) -> Any:
        return self.get_owner().get_field_value(field, record)

    def set_field_value(self, field: BaseField, record: Record, value: Any) -> bool:
        self.reset(record)
        return self.get_owner().set_field_value(field, record, value)

    def reset_field_value(self, field: BaseField, record: Record) -> None:
        self.get_owner().reset_field_value(field, record)

    def reset(self, record: Record) -> None:
        """Drop the composed value cached on ``record``."""
        self.get_owner().reset_field_value(self, record)

    # Indexable constraints

    def unique(self, name: str | None = None) -> "BaseComposed":
        self.constraints.add(ConstraintKind.UNIQUE, self.columns(), name)
        return self

    def index(self, name: str | None = None) -> "BaseComposed":
        self.constraints.add(ConstraintKind.INDEX, self.columns(), name)
        return self

    # Value contract

    def get(self, record: Record, ctx: LocaleContext | None = None) -> Any:
        return self.resolve(record, ctx)

    @abstractmethod
    def resolve(self, record: Record, ctx: LocaleContext | None = None) -> Any:
        """Read the logical value from the children."""

    def dry(self, value: Any) -> str | None:
        return coerce_string(value)

    def hydrate(self, value: Any) -> str | None:
        return coerce_string(value)

    def serialize(self, value: Any, ctx: LocaleContext | None = None) -> Any:
        return value

    def cast(self, value: Any) -> str | None:
        return coerce_string(value)
