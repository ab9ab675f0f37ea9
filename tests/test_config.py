"""Tests for config.py: env parsing and required secrets."""
from datetime import timedelta

import pytest

from quotewatch import config
from quotewatch.config import ConfigError, RateLimit, Settings, parse_duration

ENV_VARS = [
    "JWT_SECRET",
    "JWT_EXPIRES_IN",
    "JWT_ISSUER",
    "DATABASE_URL",
    "ENVIRONMENT",
    "BCRYPT_ROUNDS",
    "FREE_FAVORITES_LIMIT",
    "LOGIN_RATE_LIMIT",
    "REGISTER_RATE_LIMIT",
    "CORS_ORIGINS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of these tests.
    monkeypatch.setattr(config, "load_dotenv", lambda **_: False)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30m", timedelta(minutes=30)),
        ("45s", timedelta(seconds=45)),
        ("3600", timedelta(seconds=3600)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "7w", "d7", "-1d", "seven days"])
def test_parse_duration_rejects_garbage(raw):
    with pytest.raises(ConfigError):
        parse_duration(raw)


def test_rate_limit_parse():
    assert RateLimit.parse("5/900") == RateLimit(count=5, window_seconds=900)
    with pytest.raises(ConfigError):
        RateLimit.parse("5 per minute")


def test_missing_secret_is_a_config_error():
    with pytest.raises(ConfigError, match="JWT_SECRET"):
        Settings.from_env()


def test_blank_secret_is_a_config_error():
    with pytest.raises(ConfigError):
        Settings(jwt_secret="   ")


def test_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    settings = Settings.from_env()

    assert settings.jwt_lifetime == timedelta(days=7)
    assert settings.bcrypt_rounds == 12
    assert settings.free_favorites_limit == 5
    assert settings.login_rate_limit == RateLimit(count=5, window_seconds=900)
    assert settings.register_rate_limit == RateLimit(count=3, window_seconds=3600)
    assert settings.cors_origins == ()
    assert not settings.is_production


def test_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("JWT_EXPIRES_IN", "2h")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("FREE_FAVORITES_LIMIT", "10")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.jwt_lifetime == timedelta(hours=2)
    assert settings.is_production
    assert settings.free_favorites_limit == 10
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.log_level == "DEBUG"


def test_non_integer_setting(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("BCRYPT_ROUNDS", "lots")
    with pytest.raises(ConfigError, match="BCRYPT_ROUNDS"):
        Settings.from_env()
