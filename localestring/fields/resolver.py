from __future__ import annotations

import logging
from collections.abc import Iterable

from ..domain.errors import ConfigurationError
from ..domain.interfaces.context import LocaleContext

logger = logging.getLogger(__name__)


class LocaleResolver:
    """Pick the active and fallback locale among the configured ones.

    >>> resolver = LocaleResolver(["en", "fr"])
    >>> resolver.resolve(LocaleContext(current="de", fallback="en"))
    ('en', 'en')
    """

    def __init__(self, locales: Iterable[str]) -> None:
        self.locales = tuple(locales)
        if not self.locales:
            raise ConfigurationError("At least one locale must be configured")

    def __contains__(self, locale: object) -> bool:
        return locale in self.locales

    def validate(self, fallback: str) -> None:
        if fallback not in self.locales:
            raise ConfigurationError(
                f"Fallback locale {fallback!r} is not one of {list(self.locales)}"
            )

    def resolve(self, ctx: LocaleContext, requested: str | None = None) -> tuple[str, str]:
        fallback = ctx.fallback_locale()
        self.validate(fallback)

        wanted = requested if requested is not None else ctx.current_locale()
        if wanted in self.locales:
            return wanted, fallback

        logger.debug(
            "Locale not configured, using fallback",
            extra={"locale": wanted, "fallback": fallback},
        )
        return fallback, fallback
