"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from finavis.domain.fiscal_period import utc_today


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports ISO dates, free-form absolute dates and a few relative words:
    - Absolute dates: "2024-04-01", "2024/4/1", "April 1, 2024"
    - Relative dates: "today", "yesterday", "tomorrow", "this month",
      "last month", "this year", "last year"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative words (defaults to the UTC date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or utc_today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str, yearfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
