"""Tests for Settings defaults and validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CACHE_TTL_SECONDS", "CACHE_INVALIDATE_BY_ID", "POCKETBASE_URL", "DEFAULT_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.cache_ttl_seconds == 300
    assert settings.cache_invalidate_by_id is False
    assert settings.default_page_size == 50
    assert settings.default_sort == "-created"
    assert settings.pocketbase_url == "http://127.0.0.1:8090"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("CACHE_INVALIDATE_BY_ID", "true")
    monkeypatch.setenv("POCKETBASE_TOKEN", "tok")
    settings = Settings(_env_file=None)
    assert settings.cache_ttl_seconds == 60
    assert settings.cache_invalidate_by_id is True
    assert settings.pocketbase_token.get_secret_value() == "tok"


@pytest.mark.parametrize(
    ("field", "value", "match"),
    [
        ("cache_ttl_seconds", 0, "CACHE_TTL_SECONDS"),
        ("default_page_size", -1, "DEFAULT_PAGE_SIZE"),
        ("pocketbase_url", "ftp://pb", "POCKETBASE_URL"),
    ],
)
def test_invalid_values_rejected(field: str, value: object, match: str) -> None:
    with pytest.raises(ValidationError, match=match):
        Settings(_env_file=None, **{field: value})


def test_get_settings_is_cached() -> None:
    get_settings.cache_clear()
    assert get_settings() is get_settings()
