import os
import re

DATABASE_URL = os.getenv(
    "DATABASE_URL", "sqlite+aiosqlite:///./portfolio-tracker.db"
)
DB_ECHO = os.getenv("DB_ECHO", "0").lower() in ("1", "true", "yes", "y")
DB_INIT_ATTEMPTS = int(os.getenv("DB_INIT_ATTEMPTS", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# driver used when a plain dialect URL is configured
ASYNC_DRIVERS = {
    "sqlite": "aiosqlite",
    "postgresql": "asyncpg",
}


def async_database_url(url: str) -> str:
    """Return ``url`` with the async driver for its dialect, e.g. sqlite -> sqlite+aiosqlite."""
    dialect, sep, rest = url.partition("://")
    if not sep or "+" in dialect:
        return url
    driver = ASYNC_DRIVERS.get(dialect)
    if driver is None:
        return url
    return f"{dialect}+{driver}://{rest}"


def sync_database_url(url: str) -> str:
    """Strip an async driver suffix (+asyncpg, +aiosqlite) so sync tooling can connect."""
    dialect = url.partition("://")[0]
    if dialect.partition("+")[2] in ASYNC_DRIVERS.values():
        return re.sub(r"\+[^:]+", "", url, count=1)
    return url
