"""Environment-driven settings."""

from __future__ import annotations

from storesearch.config import SearchSettings, get_settings


def test_defaults_match_search_contract(monkeypatch):
    monkeypatch.delenv("STORESEARCH_DEBOUNCE_SECONDS", raising=False)
    settings = SearchSettings()
    assert settings.debounce_seconds == 0.3
    assert settings.single_scope_limit == 20
    assert settings.fan_out_limit == 50
    assert settings.catalog.lang == "en_us"
    assert str(settings.catalog.search_url) == "https://itunes.apple.com/search"


def test_environment_overrides_including_nested(monkeypatch):
    monkeypatch.setenv("STORESEARCH_DEBOUNCE_SECONDS", "0.5")
    monkeypatch.setenv("STORESEARCH_FAN_OUT_LIMIT", "25")
    monkeypatch.setenv("STORESEARCH_LOG_LEVEL", " debug ")
    monkeypatch.setenv("STORESEARCH_CATALOG__LANG", "ja_jp")

    settings = SearchSettings()

    assert settings.debounce_seconds == 0.5
    assert settings.fan_out_limit == 25
    assert settings.log_level == "DEBUG"
    assert settings.catalog.lang == "ja_jp"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
