from __future__ import annotations

import json
from pathlib import Path

import pytest

from localestring.config.settings import LocaleSettings
from localestring.domain.errors import ConfigurationError
from localestring.infrastructure import translations
from localestring.infrastructure.translations import DictTranslator, get_translator


def test_translate_uses_locale_then_fallback_then_key() -> None:
    t = DictTranslator({"en": {"a": "A", "b": "B"}, "fr": {"a": "À"}}, fallback="en")
    assert t.translate("a", "fr") == "À"
    assert t.translate("b", "fr") == "B"
    assert t.translate("c", "fr") == "c"
    assert t.translate("a") == "A"


def test_add_registers_text() -> None:
    t = DictTranslator()
    assert t.translate("x", "fr") == "x"
    t.add("fr", "x", "ix")
    assert t.translate("x", "fr") == "ix"
    assert t.locales == ["fr"]


def test_from_directory(tmp_path: Path) -> None:
    (tmp_path / "en.json").write_text(json.dumps({"hello": "Hello"}), encoding="utf-8")
    (tmp_path / "fr.json").write_text(json.dumps({"hello": "Bonjour"}), encoding="utf-8")
    t = DictTranslator.from_directory(tmp_path, fallback="en")
    assert t.locales == ["en", "fr"]
    assert t.translate("hello", "fr") == "Bonjour"


def test_from_directory_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        DictTranslator.from_directory(tmp_path / "missing")
    (tmp_path / "en.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        DictTranslator.from_directory(tmp_path)
    (tmp_path / "en.json").write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        DictTranslator.from_directory(tmp_path)


def test_get_translator_reads_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "fr.json").write_text(json.dumps({"bye": "Au revoir"}), encoding="utf-8")
    custom = LocaleSettings(
        locales=("en", "fr"),
        locale="fr",
        fallback_locale="en",
        translations_path=str(tmp_path),
    )
    monkeypatch.setattr("localestring.config.settings.settings", custom)
    get_translator.cache_clear()
    try:
        translator = translations.get_translator()
        assert translator.translate("bye", "fr") == "Au revoir"
        assert translator.fallback == "en"
    finally:
        get_translator.cache_clear()
