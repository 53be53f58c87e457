from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from localestring.domain.value_objects.templates import FieldTemplate

from .settings import settings


@dataclass(frozen=True)
class FieldProperties:
    keys: tuple[str, ...]
    pattern: str
    template: FieldTemplate = field(default_factory=lambda: FieldTemplate(type="string"))


# Default properties per composed field type. Locale fields follow the
# application settings for their locales and column naming pattern.
FIELD_PROPERTIES: Dict[str, FieldProperties] = {
    "locale_string": FieldProperties(settings.locales, settings.field_pattern),
    "locale_translation": FieldProperties(settings.locales, settings.field_pattern),
    "split_name": FieldProperties(
        ("lastname", "firstname"),
        "${key}",
        FieldTemplate(type="string", options={"max_length": 100}),
    ),
}


def get_field_properties(field_type: str) -> FieldProperties:
    props = FIELD_PROPERTIES.get(field_type)
    if props is not None:
        return props
    # Unknown composed types fall back to the locale defaults
    return FieldProperties(settings.locales, settings.field_pattern)
