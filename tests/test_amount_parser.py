"""Tests for amount parsing and currency formatting."""

import pytest
from decimal import Decimal

from studioledger.utils.amount_parser import (
    format_currency,
    format_percent,
    parse_amount,
    to_decimal,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("R$ 123,45", Decimal("123.45")),
        ("1.234,56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("-123.45", Decimal("-123.45")),
        ("(123.45)", Decimal("-123.45")),
        ("  80 ", Decimal("80")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_to_decimal():
    assert to_decimal(10) == Decimal("10")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("R$ 1.200,00") == Decimal("1200")
    value = Decimal("3.50")
    assert to_decimal(value) is value


@pytest.mark.parametrize("value", [True, None, [1], Decimal("NaN")])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_decimal(value)


@pytest.mark.parametrize(
    "amount,expected",
    [
        (Decimal("1234.56"), "R$ 1.234,56"),
        (Decimal("0"), "R$ 0,00"),
        (Decimal("477"), "R$ 477,00"),
        (Decimal("1234567.891"), "R$ 1.234.567,89"),
        (Decimal("-50.5"), "-R$ 50,50"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("47.7"), "47.7"),
        (Decimal("12.300000"), "12.3"),
        (Decimal("40.000000"), "40"),
        (Decimal("0.000000"), "0"),
        (Decimal("12.345"), "12.345"),
        (100, "100"),
    ],
)
def test_format_percent(value, expected):
    assert format_percent(value) == expected
