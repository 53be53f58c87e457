from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..domain.interfaces.context import LocaleContext
from ..domain.interfaces.enums import Boolean, Operator
from ..domain.interfaces.field import B, BaseField, Record, Translator
from ..domain.value_objects.templates import FieldTemplate
from ..logging_config import FieldStats
from .composed import BaseComposed
from .registry import ChildFieldMap
from .resolver import LocaleResolver

logger = logging.getLogger(__name__)


class LocaleString(BaseComposed):
    """One child field per configured locale.

    Writes go to the child of the active locale. Reads use the active locale
    and fall back to the fallback locale when nothing is stored.

    >>> title = LocaleString.of("string", name="title", locales=["en", "fr"])
    >>> title.columns()
    ['title_en', 'title_fr']
    """

    field_type = "locale_string"

    def __init__(
        self,
        name: str,
        fields: ChildFieldMap,
        *,
        fallback: str | None = None,
        hidden: bool = False,
        stats: FieldStats | None = None,
    ) -> None:
        super().__init__(name, fields, hidden=hidden, stats=stats)
        self.resolver = LocaleResolver(self.fields.keys())
        if fallback is not None:
            self.resolver.validate(fallback)

    @classmethod
    def of(
        cls,
        template: FieldTemplate | str | None = None,
        *,
        name: str,
        locales: Iterable[str] | None = None,
        pattern: str | None = None,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
        fallback: str | None = None,
        **kwargs: Any,
    ) -> "LocaleString":
        """Stamp ``template`` once per locale (configured locales by default)."""
        from ..config.field_properties import get_field_properties
        from ..config.settings import settings

        props = get_field_properties(cls.field_type)
        if template is None:
            template = props.template
        elif isinstance(template, str):
            template = FieldTemplate(type=template)
        return cls.from_template(  # type: ignore[return-value]
            name,
            template,
            props.keys if locales is None else locales,
            pattern=pattern or props.pattern,
            overrides=overrides,
            fallback=fallback or settings.fallback_locale,
            **kwargs,
        )

    @property
    def locales(self) -> tuple[str, ...]:
        return self.resolver.locales

    def active_locale(self, ctx: LocaleContext | None = None) -> str:
        active, _ = self.resolver.resolve(self._context(ctx))
        return active

    def active_field(self, ctx: LocaleContext | None = None) -> BaseField:
        return self.get_field(self.active_locale(ctx))

    def set(self, record: Record, value: Any, ctx: LocaleContext | None = None) -> bool:
        return self.active_field(ctx).set(record, value)

    def resolve(self, record: Record, ctx: LocaleContext | None = None) -> Any:
        active, fallback = self.resolver.resolve(self._context(ctx))
        value = self.get_field(active).get(record)
        if value is not None:
            if self.stats is not None:
                self.stats.record_direct()
            return value
        if fallback != active:
            value = self.get_field(fallback).get(record)
        if self.stats is not None:
            if value is None:
                self.stats.record_miss()
            else:
                self.stats.record_fallback()
        if value is not None:
            logger.debug(
                "Read fallback locale value",
                extra={"field": self.name, "locale": active, "fallback": fallback},
            )
        return value

    def where(
        self,
        builder: B,
        operator: Operator | str,
        value: Any = None,
        boolean: Boolean | str = Boolean.AND,
        ctx: LocaleContext | None = None,
    ) -> B:
        return self.active_field(ctx).where(builder, operator, value, boolean)

    def where_null(
        self,
        builder: B,
        boolean: Boolean | str = Boolean.AND,
        not_: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B:
        return self.active_field(ctx).where_null(builder, boolean, not_)

    def where_in(
        self,
        builder: B,
        values: Iterable[Any],
        boolean: Boolean | str = Boolean.AND,
        not_in: bool = False,
        ctx: LocaleContext | None = None,
    ) -> B:
        return self.active_field(ctx).where_in(builder, values, boolean, not_in)


class LocaleTranslation(LocaleString):
    """Locale string whose values are translation keys.

    Serializing looks the key up for the active locale and returns the key
    itself when no translation is registered.
    """

    field_type = "locale_translation"

    def __init__(
        self,
        name: str,
        fields: ChildFieldMap,
        *,
        translator: Translator | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, fields, **kwargs)
        self._translator = translator

    @property
    def translator(self) -> Translator:
        if self._translator is None:
            from ..infrastructure.translations import get_translator

            return get_translator()
        return self._translator

    def serialize(self, value: Any, ctx: LocaleContext | None = None) -> Any:
        if value is None:
            return None
        return self.translator.translate(str(value), self.active_locale(ctx))
