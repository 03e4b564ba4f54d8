import pytest
import pytest_asyncio

from portfolio.config import refresh_settings_cache
from portfolio.db.retry import RetryPolicy
from portfolio.db.store import StoreClient

_SETTINGS_ENV = [
    "ADMIN_EMAILS",
    "DEV_MODE",
    "LOG_LEVEL",
    "CORS_ORIGINS",
    "STORE_RETRY_ATTEMPTS",
    "STORE_RETRY_DELAY_SECONDS",
    "STORE_RETRY_BACKOFF",
    "STORE_RETRY_MAX_DELAY_SECONDS",
    "STORE_RETRY_JITTER_SECONDS",
    "STORE_TIMEOUT_SECONDS",
]

# Same budget as production, without the sleeping
FAST_RETRY_POLICY = RetryPolicy(attempts=3, delay=0, timeout=10.0)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Clear settings env + the cached Settings for each test."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest_asyncio.fixture
async def store(tmp_path):
    """A StoreClient on a fresh SQLite file with the schema created."""
    client = StoreClient.from_url(f"sqlite:///{tmp_path / 'portfolio.db'}", retry_policy=FAST_RETRY_POLICY)
    await client.create_schema()
    try:
        yield client
    finally:
        await client.dispose()
