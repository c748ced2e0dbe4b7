"""Pydantic models for price rows crossing the service boundary.

``date`` and ``price`` are stored as text. Callers may pass strings, which are
kept exactly as given, or ``datetime.date`` / ``Decimal`` values, which are
rendered to the canonical forms ``YYYY-MM-DD`` and a plain decimal string.
"""

from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


def format_date(value) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_price(value) -> str:
    if isinstance(value, float):
        value = Decimal(repr(value))
    return format(Decimal(value), "f")


def coerce_date(value):
    if isinstance(value, date_type):
        return format_date(value)
    return value


def _coerce_price(value):
    if isinstance(value, (Decimal, float)) or (
        isinstance(value, int) and not isinstance(value, bool)
    ):
        return format_price(value)
    return value


class PriceCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    ticker: str
    date: str
    price: str

    @field_validator("date", mode="before")
    @classmethod
    def render_date(cls, value):
        return coerce_date(value)

    @field_validator("price", mode="before")
    @classmethod
    def render_price(cls, value):
        return _coerce_price(value)


class PriceUpdate(BaseModel):
    model_config = ConfigDict(strict=True)

    ticker: Optional[str] = None
    date: Optional[str] = None
    price: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def render_date(cls, value):
        return coerce_date(value)

    @field_validator("price", mode="before")
    @classmethod
    def render_price(cls, value):
        return _coerce_price(value)


class PriceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    ticker: str
    date: str
    price: str
