from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from portfolio_tracker.models.schemas import PriceCreate, PriceUpdate, format_date, format_price


def test_format_date_is_iso():
    assert format_date(date(2024, 1, 2)) == "2024-01-02"
    assert format_date(datetime(2024, 1, 2, 15, 30)) == "2024-01-02"


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("185.64"), "185.64"),
        (Decimal("1E+2"), "100"),
        (185.64, "185.64"),
        (370, "370"),
    ],
)
def test_format_price_plain_decimal(value, expected):
    assert format_price(value) == expected


def test_strings_are_kept_as_given():
    p = PriceCreate(ticker="AAPL", date="2024-1-2", price="185.640")
    assert (p.date, p.price) == ("2024-1-2", "185.640")


def test_non_string_ticker_rejected():
    with pytest.raises(ValidationError):
        PriceCreate(ticker=42, date="2024-01-02", price="1")


def test_bool_price_rejected():
    with pytest.raises(ValidationError):
        PriceCreate(ticker="AAPL", date="2024-01-02", price=True)


def test_update_fields_default_to_none():
    u = PriceUpdate(price=Decimal("2.5"))
    assert u.model_dump(exclude_none=True) == {"price": "2.5"}
