"""Utility functions for studioledger."""

from studioledger.utils.date_parser import parse_date, parse_month
from studioledger.utils.amount_parser import (
    parse_amount,
    to_decimal,
    format_currency,
    format_percent,
)

__all__ = [
    "parse_date",
    "parse_month",
    "parse_amount",
    "to_decimal",
    "format_currency",
    "format_percent",
]
