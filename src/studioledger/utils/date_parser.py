"""Date parsing utilities."""

import calendar
import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this month", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # "last/this/next" + month: first day of that month
    if date_str.startswith("last "):
        if date_str[5:] == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif date_str[5:] == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        if date_str[5:] == "month":
            return today.replace(day=1)
        elif date_str[5:] == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        if date_str[5:] == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif date_str[5:] == "week":
            return today + timedelta(days=(7 - today.weekday()))

    # ISO date-times ("2024-01-15T12:00:00.000Z") keep only their date part
    iso_match = re.match(r"^(\d{4}-\d{2}-\d{2})t", date_str)
    if iso_match:
        date_str = iso_match.group(1)

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> tuple[int, int]:
    """Parse a month reference into a (year, month) tuple.

    Accepts "YYYY-MM", "MM/YYYY", "this month", "last month", "next month"
    or any full date (whose month is used).

    Raises:
        ValueError: If the month cannot be parsed
    """
    text = month_str.strip().lower()

    match = re.match(r"^(\d{4})-(\d{1,2})$", text) or re.match(
        r"^(\d{1,2})/(\d{4})$", text
    )
    if match:
        first, second = match.groups()
        year, month = (int(first), int(second)) if len(first) == 4 else (int(second), int(first))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month '{month_str}': month must be 1-12")
        return year, month

    if text in ("this month", "last month", "next month"):
        parsed = parse_date(text)
        return parsed.year, parsed.month

    try:
        parsed = parse_date(text)
    except ValueError:
        raise ValueError(
            f"Could not parse month '{month_str}'. Use YYYY-MM or 'this month'"
        ) from None
    return parsed.year, parsed.month


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    """Return (year, month) moved by ``months`` (negative moves back)."""
    shifted = date(year, month, 1) + relativedelta(months=months)
    return shifted.year, shifted.month


def months_between(start: date, year: int, month: int) -> int:
    """Return how many whole months the target month lies after ``start``."""
    return (year - start.year) * 12 + (month - start.month)
