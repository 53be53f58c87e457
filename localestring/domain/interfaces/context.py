from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from pydantic import BaseModel, ConfigDict, Field


class LocaleContext(BaseModel):
    """Locale state of the current request.

    >>> ctx = LocaleContext(current="fr", fallback="en")
    >>> ctx.current_locale(), ctx.fallback_locale()
    ('fr', 'en')
    """

    current: str = Field(..., min_length=1, description="Active locale code")
    fallback: str = Field(..., min_length=1, description="Locale consulted on a miss")

    model_config = ConfigDict(frozen=True)

    def current_locale(self) -> str:
        return self.current

    def fallback_locale(self) -> str:
        return self.fallback

    def with_current(self, locale: str) -> "LocaleContext":
        """Return a copy of this context with another active locale."""
        return LocaleContext(current=locale, fallback=self.fallback)


_active_context: ContextVar[LocaleContext | None] = ContextVar(
    "localestring_locale_context", default=None
)


def default_locale_context() -> LocaleContext:
    """Build the context described by the application settings."""
    # Imported lazily so that importing the domain layer does not read the environment.
    from localestring.config.settings import settings

    return LocaleContext(current=settings.locale, fallback=settings.fallback_locale)


def get_locale_context() -> LocaleContext:
    """Return the request-scoped locale context, defaulting to the settings."""
    ctx = _active_context.get()
    if ctx is None:
        return default_locale_context()
    return ctx


@contextmanager
def use_locale(ctx: LocaleContext) -> Iterator[LocaleContext]:
    """Make ``ctx`` the active locale context for the enclosed block.

    >>> with use_locale(LocaleContext(current="fr", fallback="en")):
    ...     get_locale_context().current
    'fr'
    """
    token = _active_context.set(ctx)
    try:
        yield ctx
    finally:
        _active_context.reset(token)
