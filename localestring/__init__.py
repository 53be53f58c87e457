"""Locale-aware composed fields for record schemas."""

from .domain.errors import ConfigurationError, LocaleStringError, TypeCoercionError
from .domain.interfaces import Boolean, LocaleContext, Operator, get_locale_context, use_locale
from .domain.value_objects import FieldTemplate
from .fields import Field, LocaleString, LocaleTranslation, SplitName, String, Text
from .infrastructure.query_builder import QueryBuilder
from .infrastructure.translations import DictTranslator
from .schema import Schema

__all__ = [
    "ConfigurationError",
    "LocaleStringError",
    "TypeCoercionError",
    "Boolean",
    "LocaleContext",
    "Operator",
    "get_locale_context",
    "use_locale",
    "FieldTemplate",
    "Field",
    "LocaleString",
    "LocaleTranslation",
    "SplitName",
    "String",
    "Text",
    "QueryBuilder",
    "DictTranslator",
    "Schema",
]
