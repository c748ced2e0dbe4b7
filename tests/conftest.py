import os
import sys

import pytest
import pytest_asyncio

# Ensure the project root is on sys.path so tests can import portfolio_tracker
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from portfolio_tracker.database import init_db


@pytest.fixture
def db_url(tmp_path):
    """A fresh SQLite file per test; file-backed so separate sessions really are separate connections."""
    return f"sqlite+aiosqlite:///{tmp_path / 'prices.db'}"


@pytest_asyncio.fixture
async def engine(db_url):
    eng = create_async_engine(db_url, future=True)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    await init_db(engine)
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session
