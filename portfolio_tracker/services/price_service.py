from typing import List, Optional
import logging
import re

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_tracker.errors import DuplicateKeyError, InvalidFieldError, MissingFieldError
from portfolio_tracker.models.price_model import Price
from portfolio_tracker.models.schemas import PriceCreate, PriceRecord, PriceUpdate, coerce_date

logger = logging.getLogger("portfolio_tracker.services")

REQUIRED_FIELDS = ("ticker", "date", "price")
# ticker and date form the key, so an empty string counts as absent for them
KEY_FIELDS = ("ticker", "date")

# SQLite: "NOT NULL constraint failed: prices.ticker"
# PostgreSQL: 'null value in column "ticker" of relation "prices" ...'
_NULL_COLUMN_PATTERNS = (
    re.compile(r"not null constraint failed: \w+\.(\w+)"),
    re.compile(r'null value in column "(\w+)"'),
)


def _is_missing(name, value) -> bool:
    if value is None:
        return True
    return name in KEY_FIELDS and value == ""


def _parse(model, values: dict, required: bool):
    if required:
        missing = [name for name in REQUIRED_FIELDS if _is_missing(name, values.get(name))]
    else:
        # None means "leave unchanged" on update
        missing = [
            name
            for name, value in values.items()
            if value is not None and _is_missing(name, value)
        ]
    if missing:
        logger.warning(f"Rejected write, missing fields: {missing}")
        raise MissingFieldError(missing)
    try:
        return model(**values)
    except ValidationError as e:
        logger.warning(f"Rejected write, invalid fields: {e.errors()}")
        raise InvalidFieldError(str(e)) from e


def _null_column(message: str) -> Optional[str]:
    for pattern in _NULL_COLUMN_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None


def _translate_integrity_error(exc: IntegrityError, ticker, date):
    message = str(exc.orig).lower()
    if "unique" in message or "duplicate" in message:
        return DuplicateKeyError(ticker, date)
    if "not null" in message or "null value" in message:
        column = _null_column(message)
        return MissingFieldError([column] if column else REQUIRED_FIELDS)
    return None


async def create_price(db: AsyncSession, ticker, date, price) -> PriceRecord:
    """Insert one price observation; raises DuplicateKeyError if the pair exists."""
    payload = _parse(
        PriceCreate, {"ticker": ticker, "date": date, "price": price}, required=True
    )
    row = Price(**payload.model_dump())
    db.add(row)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        err = _translate_integrity_error(e, payload.ticker, payload.date)
        if err is None:
            raise
        logger.warning(f"Insert rejected for {payload.ticker} {payload.date}: {err}")
        raise err from e
    await db.refresh(row)
    logger.info(f"Inserted price id={row.id} {row.ticker} {row.date} {row.price}")
    return PriceRecord.model_validate(row)


async def get_price(db: AsyncSession, ticker: str, date) -> Optional[PriceRecord]:
    q = select(Price).where(Price.ticker == ticker, Price.date == coerce_date(date))
    res = await db.execute(q)
    row = res.scalars().one_or_none()
    return PriceRecord.model_validate(row) if row is not None else None


async def get_price_by_id(db: AsyncSession, price_id: int) -> Optional[PriceRecord]:
    row = await db.get(Price, price_id)
    return PriceRecord.model_validate(row) if row is not None else None


async def list_prices(db: AsyncSession, ticker: Optional[str] = None) -> List[PriceRecord]:
    """All rows, or one ticker's rows, ordered by ticker, date and id."""
    q = select(Price).order_by(Price.ticker.asc(), Price.date.asc(), Price.id.asc())
    if ticker is not None:
        q = q.where(Price.ticker == ticker)
    res = await db.execute(q)
    rows = res.scalars().all()
    logger.debug(f"Listed {len(rows)} prices (ticker={ticker})")
    return [PriceRecord.model_validate(r) for r in rows]


async def update_price(
    db: AsyncSession, price_id: int, *, ticker=None, date=None, price=None
) -> Optional[PriceRecord]:
    """Change the given fields of one row atomically.

    Returns None when no row has ``price_id``. A change that collides with
    another row's (ticker, date) raises DuplicateKeyError and leaves the row
    as it was.
    """
    payload = _parse(
        PriceUpdate, {"ticker": ticker, "date": date, "price": price}, required=False
    )
    row = await db.get(Price, price_id)
    if row is None:
        return None
    changes = payload.model_dump(exclude_none=True)
    for field, value in changes.items():
        setattr(row, field, value)
    new_ticker, new_date = row.ticker, row.date
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        err = _translate_integrity_error(e, new_ticker, new_date)
        if err is None:
            raise
        logger.warning(f"Update rejected for id={price_id}: {err}")
        raise err from e
    await db.refresh(row)
    logger.info(f"Updated price id={price_id}: {changes}")
    return PriceRecord.model_validate(row)


async def delete_price(db: AsyncSession, price_id: int) -> int:
    """Delete one row by id; returns the number of rows removed (0 or 1)."""
    res = await db.execute(delete(Price).where(Price.id == price_id))
    await db.commit()
    if res.rowcount:
        logger.info(f"Deleted price id={price_id}")
    return res.rowcount
