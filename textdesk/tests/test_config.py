from __future__ import annotations

import pytest
from pydantic import ValidationError

from textdesk.interfaces.http.cookies import SessionCookie
from textdesk.shared.config import AppConfig, SecurityConfig, SessionConfig


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("APP_ENV", "STORAGE_BACKEND", "SESSION_TTL_SECONDS", "COOKIE_SECURE"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig()

    assert config.storage_backend == "memory"
    assert config.session.ttl_seconds == 7 * 24 * 60 * 60
    assert config.session.cookie_name == "sessionId"
    assert config.security.cookie_samesite == "Strict"
    assert config.auth.min_password_length == 6
    assert config.cookie_secure() is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "SQLAlchemy")
    monkeypatch.setenv("SESSION_TTL_SECONDS", "60")
    monkeypatch.setenv("SESSION_SWEEPER_ENABLED", "no")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test")

    config = AppConfig()

    assert config.storage_backend == "sqlalchemy"
    assert config.session.ttl_seconds == 60
    assert config.session.sweeper_enabled is False
    assert config.security.allowed_origins == ["http://a.test", "http://b.test"]


def test_unknown_storage_backend_is_rejected() -> None:
    with pytest.raises(ValidationError):
        AppConfig(storage_backend="redis")


def test_production_forces_secure_cookies() -> None:
    config = AppConfig(
        app_env="production",
        security=SecurityConfig(cookie_secure=False, allowed_origins=["https://app.test"]),
    )

    assert config.is_production()
    assert config.cookie_secure() is True


def test_cookie_follows_session_ttl() -> None:
    config = AppConfig(session=SessionConfig(ttl_seconds=120, cookie_name="sid"))

    cookie = SessionCookie.from_config(config)

    assert cookie.name == "sid"
    assert cookie.max_age == 120
    assert cookie.samesite == "Strict"
