import pytest

from portfolio.config import get_database_url, get_settings, refresh_settings_cache

_DB_ENV = ["DATABASE_URL", "POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB"]


@pytest.fixture(autouse=True)
def clear_db_env(monkeypatch):
    for name in _DB_ENV:
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults():
    settings = get_settings()
    assert settings.retry_attempts == 3
    assert settings.retry_delay_seconds == 1.0
    assert settings.retry_backoff == "fixed"
    assert settings.store_timeout_seconds == 10.0
    assert settings.admin_emails == ()
    assert settings.dev_mode is False
    assert settings.log_level == "INFO"
    assert "http://localhost:3000" in settings.cors_origins


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("STORE_RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("STORE_RETRY_DELAY_SECONDS", "0.25")
    monkeypatch.setenv("STORE_RETRY_BACKOFF", "Exponential")
    monkeypatch.setenv("STORE_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("ADMIN_EMAILS", ' Owner@Example.com , "second@example.com" ')
    monkeypatch.setenv("DEV_MODE", "yes")
    monkeypatch.setenv("CORS_ORIGINS", "https://me.dev,https://www.me.dev")
    refresh_settings_cache()

    settings = get_settings()
    assert settings.retry_attempts == 5
    assert settings.retry_delay_seconds == 0.25
    assert settings.retry_backoff == "exponential"
    assert settings.store_timeout_seconds is None
    assert settings.admin_emails == ("owner@example.com", "second@example.com")
    assert settings.dev_mode is True
    assert settings.cors_origins == ("https://me.dev", "https://www.me.dev")


def test_settings_are_cached_until_refreshed(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("STORE_RETRY_ATTEMPTS", "7")
    assert get_settings() is first
    refresh_settings_cache()
    assert get_settings().retry_attempts == 7


@pytest.mark.parametrize(
    "name,value",
    [("STORE_RETRY_BACKOFF", "linear"), ("STORE_RETRY_ATTEMPTS", "three"), ("STORE_RETRY_DELAY_SECONDS", "soon")],
)
def test_invalid_settings_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    refresh_settings_cache()
    with pytest.raises(ValueError):
        get_settings()


def test_database_url_prefers_explicit_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///portfolio.db")
    monkeypatch.setenv("POSTGRES_USER", "ignored")
    assert get_database_url() == "sqlite:///portfolio.db"


def test_database_url_built_from_components(monkeypatch):
    monkeypatch.setenv("POSTGRES_USER", "portfolio")
    monkeypatch.setenv("POSTGRES_PASSWORD", "secret")
    monkeypatch.setenv("POSTGRES_HOST", "db")
    monkeypatch.setenv("POSTGRES_PORT", "5432")
    monkeypatch.setenv("POSTGRES_DB", "site")
    assert get_database_url() == "postgresql://portfolio:secret@db:5432/site"


def test_database_url_missing_components_listed(monkeypatch):
    monkeypatch.setenv("POSTGRES_USER", "portfolio")
    monkeypatch.setenv("POSTGRES_HOST", "db")
    with pytest.raises(ValueError) as excinfo:
        get_database_url()
    message = str(excinfo.value)
    assert "POSTGRES_PASSWORD" in message
    assert "POSTGRES_PORT" in message
    assert "POSTGRES_DB" in message
    assert "POSTGRES_USER" not in message
