import pytest
from fastapi import HTTPException

from portfolio.api.auth import is_admin_email, resolve_email_from_headers
from portfolio.api.deps import require_admin
from portfolio.config import refresh_settings_cache


def test_resolve_email_prefers_auth_request_header():
    assert resolve_email_from_headers(" Me@Example.com ", "other@example.com") == "me@example.com"
    assert resolve_email_from_headers(None, "Other@Example.com") == "other@example.com"
    assert resolve_email_from_headers(None, None) is None
    assert resolve_email_from_headers("   ", None) is None


def test_is_admin_email_case_insensitive():
    assert is_admin_email("ADMIN@example.com", ["admin@example.com"])
    assert not is_admin_email("someone@example.com", ["admin@example.com"])
    assert not is_admin_email(None, ["admin@example.com"])


def test_require_admin_without_identity_is_401():
    with pytest.raises(HTTPException) as excinfo:
        require_admin(x_auth_request_email=None, x_forwarded_email=None)
    assert excinfo.value.status_code == 401


def test_require_admin_non_admin_is_403(monkeypatch):
    monkeypatch.setenv("ADMIN_EMAILS", "admin@example.com")
    refresh_settings_cache()
    with pytest.raises(HTTPException) as excinfo:
        require_admin(x_auth_request_email="visitor@example.com", x_forwarded_email=None)
    assert excinfo.value.status_code == 403


def test_require_admin_accepts_listed_email(monkeypatch):
    monkeypatch.setenv("ADMIN_EMAILS", "admin@example.com")
    refresh_settings_cache()
    assert require_admin(x_auth_request_email=None, x_forwarded_email="Admin@Example.com") == "admin@example.com"


def test_dev_mode_bypasses_gate(monkeypatch):
    monkeypatch.setenv("DEV_MODE", "true")
    refresh_settings_cache()
    assert require_admin(x_auth_request_email=None, x_forwarded_email=None) == "dev@localhost"
