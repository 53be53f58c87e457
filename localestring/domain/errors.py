from __future__ import annotations


class LocaleStringError(Exception):
    """Base class for errors raised by the field layer."""


class ConfigurationError(LocaleStringError):
    """Schema or locale configuration is invalid.

    Raised at bootstrap (field/registry construction, settings loading) and
    never recovered from.
    """


class TypeCoercionError(LocaleStringError, ValueError):
    """A value cannot be converted to or from its storage primitive."""
