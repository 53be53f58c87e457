from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, MutableMapping
from typing import Any, Protocol, TypeVar

from ..errors import ConfigurationError
from .context import LocaleContext
from .enums import Boolean, Operator

Record = MutableMapping[str, Any]
B = TypeVar("B", bound="QueryBuilder")


class QueryBuilder(Protocol):
    """Partially built query receiving grouped conditions.

    Every method mutates the builder and returns it.
    """

    def where(
        self: B,
        column: str | Callable[[B], Any],
        operator: Operator | str | None = None,
        value: Any = None,
        boolean: Boolean | str = Boolean.AND,
    ) -> B: ...

    def where_null(self: B, column: str, boolean: Boolean | str = Boolean.AND, not_: bool = False) -> B: ...

    def where_in(
        self: B,
        column: str,
        values: Iterable[Any],
        boolean: Boolean | str = Boolean.AND,
        not_: bool = False,
    ) -> B: ...


class FieldOwner(Protocol):
    """Stores field values on records (a schema, or a composed field for its children)."""

    def get_field_value(self, field: "BaseField", record: Record) -> Any: ...

    def set_field_value(self, field: "BaseField", record: Record, value: Any) -> bool: ...

    def reset_field_value(self, field: "BaseField", record: Record) -> None: ...


class Translator(Protocol):
    def translate(self, key: str, locale: str | None = None) -> str:
        """Return the text registered for ``key``, or ``key`` itself."""
        ...


class BaseField(ABC):
    """Contract shared by simple and composed fields.

    Callers (schema, repositories, query code) only rely on these methods, so
    composed and simple fields are interchangeable. ``ctx`` is the locale
    context of the call; fields that do not depend on the locale ignore it.
    """

    def __init__(self, name: str, *, hidden: bool = False) -> None:
        if not name:
            raise ConfigurationError("Field name must not be empty")
        self.name = name
        self.hidden = hidden
        self._owner: FieldOwner | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def own(self, owner: FieldOwner) -> "BaseField":
        if self._owner is not None and self._owner is not owner:
            raise ConfigurationError(f"Field {self.name!r} is already owned")
        self._owner = owner
        return self

    @property
    def owned(self) -> bool:
        return self._owner is not None

    def get_owner(self) -> FieldOwner:
        if self._owner is None:
            raise ConfigurationError(f"Field {self.name!r} is not attached to an owner")
        return self._owner

    def leaves(self) -> list["BaseField"]:
        """Simple fields ultimately storing this field's data."""
        return [self]

    @abstractmethod
    def columns(self) -> list[str]:
        """Physical storage columns backing this field."""

    @abstractmethod
    def get(self, record: Record, ctx: LocaleContext | None = None) -> Any: ...

    @abstractmethod
    def set(self, record: Record, value: Any, ctx: LocaleContext | None = None) -> bool: ...

    @abstractmethod
    def dry(self, value: Any) -> Any:
        """Convert a logical value to its storage primitive."""

    @abstractmethod
    def hydrate(self, value: Any) -> Any:
        """Convert a storage primitive back to a logical value."""

    @abstractmethod
    def serialize(self, value: Any, ctx: LocaleContext | None = None) -> Any:
        """Format a value for outputs."""

    @abstractmethod
    def cast(self, value: Any) -> Any:
        """Normalize a raw input value."""

    @abstractmethod
    def where(
        self,
        builder: B,
        operator: Operator | str,
        value: Any = None,
        boolean: Boolean | str = Boolean.AND,
        ctx: LocaleContext | None = None,
    ) -> B: ...

    @abstractmethod
    def where_null(
        self,
        builder: B,
        boolean: Boolean | str = Boolean.AND,
        not_: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B: ...

    def where_not_null(
        self, builder: B, boolean: Boolean | str = Boolean.AND, ctx: LocaleContext | None = None
    ) -> B:
        return self.where_null(builder, boolean, True, ctx=ctx)

    @abstractmethod
    def where_in(
        self,
        builder: B,
        values: Iterable[Any],
        boolean: Boolean | str = Boolean.AND,
        not_in: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B: ...

    def where_not_in(
        self,
        builder: B,
        values: Iterable[Any],
        boolean: Boolean | str = Boolean.AND,
        ctx: LocaleContext | None = None,
    ) -> B:
        return self.where_in(builder, values, boolean, True, ctx=ctx)
