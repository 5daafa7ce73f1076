"""Settings tests — defaults mirror the fetch contract; env overrides validated."""

import pytest
from pydantic import ValidationError

from ampcheck.config import Settings, get_settings


def test_fetch_defaults():
    settings = Settings()
    assert settings.fetch_timeout_seconds == 11.0
    assert settings.fetch_retries == 0
    assert settings.validator_executable == "amphtml-validator"
    assert settings.validator_js is None


def test_env_override(monkeypatch):
    monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("VALIDATOR_JS", "/srv/validator.js")
    settings = get_settings()
    assert settings.fetch_timeout_seconds == 3.5
    assert settings.validator_js == "/srv/validator.js"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize("field, value", [
    ("fetch_timeout_seconds", 0),
    ("validator_timeout_seconds", -1),
    ("fetch_retries", -1),
])
def test_rejects_invalid_values(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})
