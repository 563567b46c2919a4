from datetime import date, datetime
from decimal import Decimal

import pytest

from vehicle_docs.formatting import (
    format_currency, format_date, format_km, format_number, format_short_date, parse_date, to_decimal,
)


@pytest.mark.parametrize(
    "amount, expected",
    [
        (12100, "12.100,00 €"),
        (Decimal("10000.00"), "10.000,00 €"),
        (0, "0,00 €"),
        (None, "0,00 €"),
        (999.5, "999,50 €"),
        ("1234567.891", "1.234.567,89 €"),
        (-5.5, "-5,50 €"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_number_and_km():
    assert format_number(45200) == "45.200"
    assert format_number(999) == "999"
    assert format_km(87500) == "87.500 km"
    assert format_km(None) == "0 km"


def test_to_decimal_from_float_uses_repr():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("") == Decimal("0")


def test_long_date():
    assert format_date(date(2024, 3, 5)) == "05 de marzo de 2024"
    assert format_date("2023-12-31") == "31 de diciembre de 2023"
    assert format_date(None) == ""


def test_short_date():
    assert format_short_date("2019-04-10") == "10/04/2019"
    assert format_short_date(datetime(2024, 1, 2, 15, 30)) == "02/01/2024"
    assert format_short_date("") == ""


def test_parse_date_accepts_iso_timestamps():
    assert parse_date("2024-03-05T10:00:00") == date(2024, 3, 5)
