from sqlalchemy import Integer, String, inspect
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from portfolio_tracker.config import DATABASE_URL, DB_ECHO, DB_INIT_ATTEMPTS, async_database_url
from portfolio_tracker.errors import SchemaConflictError
from typing import Optional
import asyncio
import logging

engine = create_async_engine(async_database_url(DATABASE_URL), echo=DB_ECHO, future=True)

AsyncSessionLocal = sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)
Base = declarative_base()

logger = logging.getLogger("portfolio_tracker.database")


async def init_db(bind: Optional[AsyncEngine] = None, attempts: int = DB_INIT_ATTEMPTS):
    """Create the prices table if it is absent and verify an existing one.

    Connection failures are retried with a short linear backoff, up to
    ``attempts`` times. A table whose definition does not match the mapping
    raises SchemaConflictError immediately.
    """
    # register the mapped tables on Base.metadata
    from portfolio_tracker.models import price_model  # noqa: F401

    bind = bind or engine
    attempt = 0
    while True:
        try:
            async with bind.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
                await conn.run_sync(_verify_prices_table)
            break
        except (OperationalError, InterfaceError, OSError) as e:
            attempt += 1
            if attempt >= attempts:
                logger.error(f"Database not ready after {attempt} attempts: {e}")
                raise
            wait_seconds = min(5, 0.5 * attempt)
            logger.warning(
                f"Database not ready (attempt {attempt}): {e}. Retrying in {wait_seconds}s..."
            )
            await asyncio.sleep(wait_seconds)
    logger.info(f"Database ready at {bind.url.render_as_string(hide_password=True)}")


def _verify_prices_table(sync_conn):
    from portfolio_tracker.models.price_model import Price

    table = Price.__table__
    problems = schema_problems(sync_conn, table.name)
    if problems:
        logger.error(f"Schema conflict on '{table.name}': {problems}")
        raise SchemaConflictError(table.name, problems)


def schema_problems(sync_conn, table_name="prices"):
    """List the differences between the existing table and the expected schema."""
    insp = inspect(sync_conn)
    columns = {c["name"]: c for c in insp.get_columns(table_name)}
    problems = []

    expected = {"id": Integer, "ticker": String, "date": String, "price": String}
    for name, type_ in expected.items():
        col = columns.get(name)
        if col is None:
            problems.append(f"missing column '{name}'")
            continue
        if not isinstance(col["type"], type_):
            problems.append(f"column '{name}' has type {col['type']}")
        if name != "id" and col.get("nullable", True):
            problems.append(f"column '{name}' is nullable")

    pk = insp.get_pk_constraint(table_name).get("constrained_columns") or []
    if list(pk) != ["id"]:
        problems.append(f"primary key is {pk}, expected ['id']")

    unique_sets = [
        set(uc["column_names"]) for uc in insp.get_unique_constraints(table_name)
    ]
    unique_sets += [
        set(ix["column_names"])
        for ix in insp.get_indexes(table_name)
        if ix.get("unique")
    ]
    if {"ticker", "date"} not in unique_sets:
        problems.append("no unique constraint on (ticker, date)")

    return problems
