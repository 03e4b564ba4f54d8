import pytest

from portfolio.db.store import to_async_url, to_sync_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("postgresql://u:p@db:5432/site", "postgresql+asyncpg://u:p@db:5432/site"),
        ("postgresql+psycopg2://u:p@db:5432/site", "postgresql+asyncpg://u:p@db:5432/site"),
        ("postgresql+asyncpg://u:p@db:5432/site", "postgresql+asyncpg://u:p@db:5432/site"),
        ("sqlite:///portfolio.db", "sqlite+aiosqlite:///portfolio.db"),
    ],
)
def test_to_async_url(url, expected):
    assert to_async_url(url) == expected


@pytest.mark.parametrize(
    "url,expected",
    [
        ("postgresql+asyncpg://u:p@db:5432/site", "postgresql+psycopg2://u:p@db:5432/site"),
        ("sqlite+aiosqlite:///portfolio.db", "sqlite+pysqlite:///portfolio.db"),
    ],
)
def test_to_sync_url(url, expected):
    assert to_sync_url(url) == expected
