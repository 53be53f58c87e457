"""Translation catalogues used to serialize translation-key fields."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

from localestring.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


class DictTranslator:
    """Look keys up in ``{locale: {key: text}}`` catalogues.

    A key missing from the requested locale is looked up in the fallback
    locale, then returned unchanged.

    >>> t = DictTranslator({"en": {"greeting": "Hello"}}, fallback="en")
    >>> t.translate("greeting", "fr"), t.translate("missing", "en")
    ('Hello', 'missing')
    """

    def __init__(
        self,
        catalogues: Mapping[str, Mapping[str, str]] | None = None,
        *,
        fallback: str | None = None,
    ) -> None:
        self._catalogues: dict[str, dict[str, str]] = {
            locale: dict(entries) for locale, entries in (catalogues or {}).items()
        }
        self.fallback = fallback

    @classmethod
    def from_directory(cls, path: str | Path, *, fallback: str | None = None) -> "DictTranslator":
        """Load every ``<locale>.json`` file found in ``path``."""
        directory = Path(path)
        if not directory.is_dir():
            raise ConfigurationError(f"Translations directory not found: {directory}")
        catalogues: dict[str, dict[str, str]] = {}
        for file in sorted(directory.glob("*.json")):
            try:
                data = json.loads(file.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise ConfigurationError(f"Invalid translation file {file}: {exc}") from exc
            if not isinstance(data, dict):
                raise ConfigurationError(f"Translation file {file} must contain an object")
            catalogues[file.stem] = {str(k): str(v) for k, v in data.items()}
        logger.debug("Loaded translations", extra={"locales": sorted(catalogues)})
        return cls(catalogues, fallback=fallback)

    @property
    def locales(self) -> list[str]:
        return sorted(self._catalogues)

    def add(self, locale: str, key: str, text: str) -> None:
        self._catalogues.setdefault(locale, {})[key] = text

    def translate(self, key: str, locale: str | None = None) -> str:
        for candidate in (locale, self.fallback):
            if candidate is None:
                continue
            text = self._catalogues.get(candidate, {}).get(key)
            if text is not None:
                return text
        return key


@lru_cache(maxsize=1)
def get_translator() -> DictTranslator:
    """Return the translator described by the application settings."""
    from localestring.config.settings import settings

    if settings.translations_path:
        return DictTranslator.from_directory(
            settings.translations_path, fallback=settings.fallback_locale
        )
    return DictTranslator(fallback=settings.fallback_locale)
