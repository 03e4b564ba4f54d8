"""Runtime settings sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

_DEFAULT_CORS_ORIGINS: Tuple[str, ...] = (
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
)


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _float_env(var_name: str, default: float) -> float:
    raw = os.getenv(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{var_name} must be a number, got {raw!r}")


def _int_env(var_name: str, default: int) -> int:
    raw = os.getenv(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var_name} must be an integer, got {raw!r}")


def _list_env(var_name: str) -> Tuple[str, ...]:
    raw = os.getenv(var_name, "")
    values = []
    for entry in raw.split(","):
        cleaned = entry.strip().strip('"').strip("'")
        if cleaned:
            values.append(cleaned)
    return tuple(values)


def get_database_url() -> str:
    """Return DATABASE_URL or build one from the POSTGRES_* components."""
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    components = {
        "POSTGRES_USER": os.getenv("POSTGRES_USER"),
        "POSTGRES_PASSWORD": os.getenv("POSTGRES_PASSWORD"),
        "POSTGRES_HOST": os.getenv("POSTGRES_HOST"),
        "POSTGRES_PORT": os.getenv("POSTGRES_PORT"),
        "POSTGRES_DB": os.getenv("POSTGRES_DB"),
    }
    missing = [name for name, value in components.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return (
        f"postgresql://{components['POSTGRES_USER']}:{components['POSTGRES_PASSWORD']}"
        f"@{components['POSTGRES_HOST']}:{components['POSTGRES_PORT']}/{components['POSTGRES_DB']}"
    )


@dataclass(frozen=True)
class Settings:
    retry_attempts: int = 3
    retry_delay_seconds: float = 1.0
    retry_backoff: str = "fixed"
    retry_max_delay_seconds: float = 30.0
    retry_jitter_seconds: float = 0.0
    store_timeout_seconds: Optional[float] = 10.0
    admin_emails: Tuple[str, ...] = ()
    dev_mode: bool = False
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = _DEFAULT_CORS_ORIGINS

    @property
    def database_url(self) -> str:
        # Resolved lazily so the API can be imported without database configuration.
        return get_database_url()


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings built from the current environment."""
    backoff = os.getenv("STORE_RETRY_BACKOFF", "fixed").strip().lower()
    if backoff not in ("fixed", "exponential"):
        raise ValueError(f"STORE_RETRY_BACKOFF must be 'fixed' or 'exponential', got {backoff!r}")

    timeout = _float_env("STORE_TIMEOUT_SECONDS", 10.0)
    return Settings(
        retry_attempts=_int_env("STORE_RETRY_ATTEMPTS", 3),
        retry_delay_seconds=_float_env("STORE_RETRY_DELAY_SECONDS", 1.0),
        retry_backoff=backoff,
        retry_max_delay_seconds=_float_env("STORE_RETRY_MAX_DELAY_SECONDS", 30.0),
        retry_jitter_seconds=_float_env("STORE_RETRY_JITTER_SECONDS", 0.0),
        store_timeout_seconds=timeout if timeout > 0 else None,
        admin_emails=tuple(e.lower() for e in _list_env("ADMIN_EMAILS")),
        dev_mode=_normalize_bool(os.getenv("DEV_MODE"), default=False),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_list_env("CORS_ORIGINS") or _DEFAULT_CORS_ORIGINS,
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
