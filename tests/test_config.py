import pytest

from portfolio_tracker.config import async_database_url, sync_database_url


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite:///./prices.db", "sqlite+aiosqlite:///./prices.db"),
        ("postgresql://u:p@db:5432/prices", "postgresql+asyncpg://u:p@db:5432/prices"),
        ("postgresql+asyncpg://u:p@db/prices", "postgresql+asyncpg://u:p@db/prices"),
        ("mysql://u:p@db/prices", "mysql://u:p@db/prices"),
    ],
)
def test_async_database_url(url, expected):
    assert async_database_url(url) == expected


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite+aiosqlite:///./prices.db", "sqlite:///./prices.db"),
        ("postgresql+asyncpg://u:p@db:5432/prices", "postgresql://u:p@db:5432/prices"),
        ("postgresql+psycopg2://u:p@db/prices", "postgresql+psycopg2://u:p@db/prices"),
        ("sqlite:///./prices.db", "sqlite:///./prices.db"),
    ],
)
def test_sync_database_url(url, expected):
    assert sync_database_url(url) == expected
