"""Application settings for locale-aware fields.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through a Pydantic settings object.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from localestring.domain.errors import ConfigurationError

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_LOCALES = ("en", "fr")
DEFAULT_FALLBACK_LOCALE = "en"
DEFAULT_FIELD_PATTERN = "${name}_${locale}"


class LocaleSettings(BaseModel):
    """Immutable settings object used across the application."""

    locales: tuple[str, ...]
    locale: str
    fallback_locale: str
    field_pattern: str = DEFAULT_FIELD_PATTERN
    translations_path: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("locales")
    @classmethod
    def _require_locales(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("at least one locale must be configured")
        if len(set(v)) != len(v):
            raise ValueError(f"duplicate locales in {v!r}")
        return v

    @model_validator(mode="after")
    def _fallback_is_configured(self) -> "LocaleSettings":
        if self.fallback_locale not in self.locales:
            raise ValueError(
                f"fallback locale {self.fallback_locale!r} is not one of {list(self.locales)}"
            )
        return self


def _split_locales(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _build_settings() -> LocaleSettings:
    """Construct the ``LocaleSettings`` instance based on environment variables."""

    raw_locales = os.getenv("APP_LOCALES")
    locales = _split_locales(raw_locales) if raw_locales is not None else DEFAULT_LOCALES
    fallback = os.getenv("APP_FALLBACK_LOCALE", DEFAULT_FALLBACK_LOCALE).strip()
    locale = os.getenv("APP_LOCALE", fallback).strip()

    try:
        return LocaleSettings(
            locales=locales,
            locale=locale,
            fallback_locale=fallback,
            field_pattern=os.getenv("LOCALE_FIELD_PATTERN", DEFAULT_FIELD_PATTERN),
            translations_path=os.getenv("LOCALE_TRANSLATIONS_PATH") or None,
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid locale settings: {exc}") from exc


# Public settings instance
settings = _build_settings()
