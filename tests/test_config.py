"""Settings — defaults, environment overrides, and caching."""

import pytest
from pydantic import ValidationError

from apitime.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("APITIME_LOG_FORMAT", raising=False)
    monkeypatch.delenv("APITIME_CONFIGURATIONS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.http_timeout_seconds == 30.0
    assert settings.raw_snippet_limit == 1000
    assert settings.configurations == {}
    assert settings.user_agent.startswith("apitime/")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("APITIME_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("APITIME_LOG_LEVEL", "debug")
    monkeypatch.setenv("APITIME_CONFIGURATIONS", '{"svc": "https://api.example.com"}')
    settings = Settings(_env_file=None)
    assert settings.http_timeout_seconds == 5.0
    assert settings.log_level == "DEBUG"
    assert settings.configurations == {"svc": "https://api.example.com"}


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, http_timeout_seconds=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_format="xml")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
