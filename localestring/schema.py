"""Model schema: owns top-level fields and stores their values on records.

Records are plain mutable mappings keyed by physical column name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from .domain.errors import ConfigurationError
from .domain.interfaces.context import LocaleContext
from .domain.interfaces.field import BaseField, Record
from .fields.composed import BaseComposed
from .fields.constraints import Constraint
from .infrastructure.query_builder import QueryBuilder


class Schema:
    def __init__(self, table: str, fields: Iterable[BaseField], *, primary_key: str = "id") -> None:
        self.table = table
        self.primary_key = primary_key
        self._fields: dict[str, BaseField] = {}
        seen_columns = {primary_key}
        for field in fields:
            if field.name in self._fields:
                raise ConfigurationError(f"Duplicate field {field.name!r} in schema {table!r}")
            for column in field.columns():
                if column in seen_columns:
                    raise ConfigurationError(f"Duplicate column {column!r} in schema {table!r}")
                seen_columns.add(column)
            self._fields[field.name] = field.own(self)

    def __iter__(self) -> Iterator[BaseField]:
        return iter(self._fields.values())

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def get_field(self, name: str) -> BaseField:
        try:
            return self._fields[name]
        except KeyError:
            raise ConfigurationError(f"Schema {self.table!r} has no field {name!r}") from None

    def leaves(self) -> list[BaseField]:
        return [leaf for field in self._fields.values() for leaf in field.leaves()]

    def columns(self) -> list[str]:
        return [self.primary_key] + [c for leaf in self.leaves() for c in leaf.columns()]

    def constraints(self) -> list[Constraint]:
        return [
            constraint
            for field in self._fields.values()
            if isinstance(field, BaseComposed)
            for constraint in field.constraints
        ]

    # Field owner

    @staticmethod
    def _column(field: BaseField) -> str:
        columns = field.columns()
        if len(columns) != 1:
            raise ConfigurationError(f"Field {field.name!r} is not stored in a single column")
        return columns[0]

    def get_field_value(self, field: BaseField, record: Record) -> Any:
        return record.get(self._column(field))

    def set_field_value(self, field: BaseField, record: Record, value: Any) -> bool:
        record[self._column(field)] = value
        return True

    def reset_field_value(self, field: BaseField, record: Record) -> None:
        if field.name not in field.columns():
            record.pop(field.name, None)

    # Records

    def new_record(self, values: Mapping[str, Any] | None = None, ctx: LocaleContext | None = None) -> dict[str, Any]:
        """Build a record, routing each logical value through its field."""
        record: dict[str, Any] = {self.primary_key: None}
        for leaf in self.leaves():
            for column in leaf.columns():
                record[column] = None
        for name, value in (values or {}).items():
            self.get_field(name).set(record, value, ctx)
        return record

    def fill(self, record: Record, values: Mapping[str, Any], ctx: LocaleContext | None = None) -> Record:
        for name, value in values.items():
            self.get_field(name).set(record, value, ctx)
        return record

    def dry(self, record: Record) -> dict[str, Any]:
        """Storage primitives of every column except the primary key."""
        return {self._column(leaf): leaf.dry(self.get_field_value(leaf, record)) for leaf in self.leaves()}

    def hydrate(self, row: Mapping[str, Any]) -> dict[str, Any]:
        record: dict[str, Any] = {self.primary_key: row.get(self.primary_key)}
        for leaf in self.leaves():
            column = self._column(leaf)
            record[column] = leaf.hydrate(row.get(column))
        return record

    def serialize(self, record: Record, ctx: LocaleContext | None = None) -> dict[str, Any]:
        """Output view of a record: visible top-level fields only."""
        out: dict[str, Any] = {self.primary_key: record.get(self.primary_key)}
        for field in self._fields.values():
            if field.hidden:
                continue
            out[field.name] = field.serialize(field.get(record, ctx), ctx)
        return out

    def query(self) -> QueryBuilder:
        return QueryBuilder(self.table)
