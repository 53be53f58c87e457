"""Core interfaces shared by fields, schemas and query builders."""

from .context import LocaleContext, get_locale_context, use_locale
from .enums import Boolean, Operator
from .field import BaseField, FieldOwner, QueryBuilder, Record, Translator

__all__ = [
    "LocaleContext",
    "get_locale_context",
    "use_locale",
    "Boolean",
    "Operator",
    "BaseField",
    "FieldOwner",
    "QueryBuilder",
    "Record",
    "Translator",
]
