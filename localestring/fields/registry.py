"""Field type registry and the builder stamping one child field per key."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from string import Template
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from ..domain.errors import ConfigurationError
from ..domain.interfaces.field import BaseField
from ..domain.value_objects.templates import FieldOptions, FieldTemplate

logger = logging.getLogger(__name__)

ChildFieldMap = Mapping[str, BaseField]
FieldFactory = Callable[[str, str, Any], BaseField]

DEFAULT_CHILD_PATTERN = "${name}_${key}"
_COLUMN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class FieldType:
    name: str
    options_model: type[FieldOptions]
    factory: FieldFactory


_FIELD_TYPES: dict[str, FieldType] = {}


def register_field_type(
    name: str, options_model: type[FieldOptions] = FieldOptions
) -> Callable[[FieldFactory], FieldFactory]:
    """Register ``factory(name, column, options)`` under a template type name."""

    def decorator(factory: FieldFactory) -> FieldFactory:
        if name in _FIELD_TYPES:
            raise ConfigurationError(f"Field type {name!r} is already registered")
        _FIELD_TYPES[name] = FieldType(name, options_model, factory)
        return factory

    return decorator


def get_field_type(name: str) -> FieldType:
    try:
        return _FIELD_TYPES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown field type {name!r}") from None


def create_field(
    template: FieldTemplate,
    name: str,
    *,
    column: str | None = None,
    **overrides: Any,
) -> BaseField:
    """Instantiate a single field from ``template``."""
    field_type = get_field_type(template.type)
    try:
        options = field_type.options_model.model_validate({**template.options, **overrides})
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid options for {template.type!r} field {name!r}: {exc}"
        ) from exc
    return field_type.factory(name, column or name, options)


def child_column(pattern: str, name: str, key: str) -> str:
    """Physical column of child ``key`` of the composed field ``name``.

    Hyphens in the key are written as underscores, so ``en-US`` lands in
    ``title_en_US``.

    >>> child_column("${name}_${locale}", "title", "fr")
    'title_fr'
    """
    slug = key.replace("-", "_")
    try:
        column = Template(pattern).substitute(name=name, key=slug, locale=slug)
    except (KeyError, ValueError) as exc:
        raise ConfigurationError(f"Invalid field naming pattern {pattern!r}: {exc}") from exc
    if not _COLUMN.match(column):
        raise ConfigurationError(
            f"Pattern {pattern!r} gives invalid column name {column!r} for key {key!r}"
        )
    return column


def build(
    template: FieldTemplate,
    keys: Iterable[str],
    *,
    name: str,
    pattern: str | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> ChildFieldMap:
    """Build the child field map of the composed field ``name``.

    Every child is hidden. The map is read-only and only returned once all
    children are built.
    """
    keys = list(keys)
    overrides = overrides or {}
    pattern = pattern or DEFAULT_CHILD_PATTERN

    if not keys:
        raise ConfigurationError(f"Composed field {name!r} needs at least one key")
    unknown = set(overrides) - set(keys)
    if unknown:
        raise ConfigurationError(f"Overrides for unknown keys {sorted(unknown)} on {name!r}")

    children: dict[str, BaseField] = {}
    columns: set[str] = set()
    for key in keys:
        if not key:
            raise ConfigurationError(f"Empty key in composed field {name!r}")
        if key in children:
            raise ConfigurationError(f"Duplicate key {key!r} in composed field {name!r}")
        column = child_column(pattern, name, key)
        if column in columns:
            raise ConfigurationError(
                f"Pattern {pattern!r} maps several keys of {name!r} to column {column!r}"
            )
        options = {**overrides.get(key, {}), "hidden": True}
        children[key] = create_field(template, f"{name}_{key}", column=column, **options)
        columns.add(column)

    logger.debug(
        "Built child fields",
        extra={"field": name, "keys": keys, "columns": sorted(columns)},
    )
    return MappingProxyType(children)
