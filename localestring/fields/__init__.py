"""Field types. Importing this package registers the built-in templates."""

from .base import Field, String, Text, coerce_string
from .composed import BaseComposed
from .constraints import Constraint, ConstraintKind, IndexableConstraints
from .locale_string import LocaleString, LocaleTranslation
from .registry import ChildFieldMap, build, create_field, register_field_type
from .resolver import LocaleResolver
from .split_name import SplitName

__all__ = [
    "Field",
    "String",
    "Text",
    "coerce_string",
    "BaseComposed",
    "Constraint",
    "ConstraintKind",
    "IndexableConstraints",
    "LocaleString",
    "LocaleTranslation",
    "ChildFieldMap",
    "build",
    "create_field",
    "register_field_type",
    "LocaleResolver",
    "SplitName",
]
