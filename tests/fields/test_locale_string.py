from __future__ import annotations

import pytest

from localestring.domain.errors import ConfigurationError, TypeCoercionError
from localestring.domain.interfaces.context import LocaleContext, use_locale
from localestring.domain.value_objects.templates import FieldTemplate
from localestring.fields import LocaleString, LocaleTranslation, String
from localestring.infrastructure.query_builder import QueryBuilder
from localestring.infrastructure.translations import DictTranslator
from localestring.logging_config import FieldStats
from localestring.schema import Schema

FR = LocaleContext(current="fr", fallback="en")
EN = LocaleContext(current="en", fallback="en")


def _title(**kwargs) -> tuple[Schema, LocaleString]:
    title = LocaleString.of("string", name="title", locales=["en", "fr"], **kwargs)
    return Schema("articles", [title]), title


def test_of_builds_hidden_locale_children() -> None:
    _, title = _title()
    assert title.locales == ("en", "fr")
    assert title.columns() == ["title_en", "title_fr"]
    assert all(isinstance(child, String) and child.hidden for child in title.fields.values())
    assert not title.hidden
    assert title.has_field("fr")
    assert not title.has_field("de")
    with pytest.raises(ConfigurationError):
        title.get_field("de")


def test_of_uses_configured_locales_by_default() -> None:
    from localestring.config.field_properties import get_field_properties

    field = LocaleString.of(name="summary")
    assert field.locales == get_field_properties("locale_string").keys


def test_set_and_resolve_per_locale() -> None:
    schema, title = _title()
    record = schema.new_record()

    assert title.set(record, "Bonjour", FR) is True
    assert record["title_fr"] == "Bonjour"
    # Nothing stored for en, and the fallback is en itself
    assert title.resolve(record, EN) is None

    title.set(record, "Hello", EN)
    assert title.resolve(record, FR) == "Bonjour"
    assert title.resolve(record, EN) == "Hello"
    assert title.get(record, FR) == "Bonjour"


@pytest.mark.parametrize("locale", ["en", "fr"])
def test_value_written_under_a_locale_reads_back(locale: str) -> None:
    schema, title = _title()
    record = schema.new_record()
    ctx = LocaleContext(current=locale, fallback="en")
    title.set(record, f"value-{locale}", ctx)
    assert title.resolve(record, ctx) == f"value-{locale}"


def test_fallback_value_is_read_when_active_is_empty() -> None:
    schema, title = _title()
    record = schema.new_record()
    title.set(record, "Hello", EN)
    assert title.resolve(record, FR) == "Hello"


def test_resolve_returns_none_when_no_value() -> None:
    schema, title = _title()
    assert title.resolve(schema.new_record(), FR) is None


def test_unconfigured_locale_reads_and_writes_fallback() -> None:
    schema, title = _title()
    record = schema.new_record()
    title.set(record, "Hallo", LocaleContext(current="de", fallback="en"))
    assert record["title_en"] == "Hallo"
    assert title.active_locale(LocaleContext(current="de", fallback="en")) == "en"


def test_ambient_context_is_used_when_none_given() -> None:
    schema, title = _title()
    record = schema.new_record()
    with use_locale(FR):
        title.set(record, "Bonjour")
        assert title.resolve(record) == "Bonjour"
    assert record["title_fr"] == "Bonjour"


def test_set_resets_cached_composed_value() -> None:
    schema, title = _title()
    record = schema.new_record()
    record["title"] = "stale"
    title.set(record, "Bonjour", FR)
    assert "title" not in record


def test_fallback_must_be_configured() -> None:
    with pytest.raises(ConfigurationError):
        LocaleString.of("string", name="title", locales=["fr", "de"])
    _, title = _title()
    record: dict = {}
    with pytest.raises(ConfigurationError):
        title.resolve(record, LocaleContext(current="fr", fallback="it"))


@pytest.mark.parametrize("method", ["dry", "hydrate", "cast"])
def test_value_coercions(method: str) -> None:
    _, title = _title()
    convert = getattr(title, method)
    assert convert(None) is None
    assert convert("abc") == "abc"
    assert convert(12) == "12"
    assert convert(b"caf\xc3\xa9") == "café"
    with pytest.raises(TypeCoercionError):
        convert(["not", "a", "string"])


def test_dry_hydrate_round_trip() -> None:
    _, title = _title()
    for value in ["Bonjour", "", "12", None]:
        assert title.hydrate(title.dry(value)) == value


def test_serialize_is_identity() -> None:
    _, title = _title()
    assert title.serialize("greeting", FR) == "greeting"


def test_child_errors_propagate() -> None:
    title = LocaleString.of(
        FieldTemplate(type="string", options={"max_length": 3}), name="code", locales=["en", "fr"]
    )
    schema = Schema("codes", [title])
    record = schema.new_record()
    with pytest.raises(TypeCoercionError):
        title.set(record, "too long", FR)
    assert record["code_fr"] is None


def test_predicates_target_active_locale_column() -> None:
    _, title = _title()

    qb = QueryBuilder("articles")
    assert title.where(qb, "=", "Bonjour", ctx=FR) is qb
    assert qb.to_sql() == ("title_fr = ?", ["Bonjour"])

    qb = title.where_in(QueryBuilder("articles"), ["Hello", "Hi"], ctx=EN)
    assert qb.to_sql() == ("title_en IN (?, ?)", ["Hello", "Hi"])

    qb = title.where_not_in(QueryBuilder("articles"), ["Hello"], ctx=FR)
    assert qb.to_sql() == ("title_fr NOT IN (?)", ["Hello"])

    qb = title.where_not_null(QueryBuilder("articles"), ctx=FR)
    qb = title.where_null(qb, "or", ctx=EN)
    assert qb.to_sql() == ("title_fr IS NOT NULL OR title_en IS NULL", [])


def test_region_locales_query_underscored_columns() -> None:
    title = LocaleString.of("string", name="title", locales=["en-US", "fr-FR"], fallback="en-US")
    schema = Schema("articles", [title])
    assert schema.columns() == ["id", "title_en_US", "title_fr_FR"]

    ctx = LocaleContext(current="fr-FR", fallback="en-US")
    qb = title.where(QueryBuilder("articles"), "=", "x", ctx=ctx)
    assert qb.to_sql() == ("title_fr_FR = ?", ["x"])

    record = schema.new_record()
    title.set(record, "Bonjour", ctx)
    assert record["title_fr_FR"] == "Bonjour"
    assert title.resolve(record, ctx) == "Bonjour"


def test_stats_count_direct_fallback_and_misses() -> None:
    stats = FieldStats()
    schema, title = _title(stats=stats)
    record = schema.new_record()
    title.resolve(record, FR)
    title.set(record, "Hello", EN)
    title.resolve(record, FR)
    title.resolve(record, EN)
    assert stats.reads == 3
    assert stats.fallback_rate == pytest.approx(100 / 3)


def test_translation_variant_serializes_through_translator() -> None:
    translator = DictTranslator(
        {"en": {"greeting": "Hello"}, "fr": {"greeting": "Bonjour"}}, fallback="en"
    )
    field = LocaleTranslation.of("string", name="label", locales=["en", "fr"], translator=translator)
    assert field.serialize("greeting", FR) == "Bonjour"
    assert field.serialize("greeting", EN) == "Hello"
    assert field.serialize("unknown.key", FR) == "unknown.key"
    assert field.serialize(None, FR) is None


def test_translation_variant_defaults_to_settings_translator() -> None:
    field = LocaleTranslation.of("string", name="label", locales=["en", "fr"])
    assert field.serialize("some.key", FR) == "some.key"
