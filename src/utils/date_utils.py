"""Date parsing and formatting helpers shared by the domain and billing layers."""

from datetime import date, datetime
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

DateInput = Union[date, datetime, str, None]

_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d", "%Y%m%d")


def parse_calendar_date(value: DateInput) -> Optional[date]:
    """
    Parse a loosely formatted date into a calendar date.

    Accepts ``date``/``datetime`` objects, ISO 8601 dates or timestamps and
    slash or dot separated dates. Time-of-day is discarded.

    Returns:
        The calendar date, or None when the value is empty or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_slash_date(d: date) -> str:
    """Format a date as YYYY/MM/DD."""
    return f"{d.year}/{d.month:02d}/{d.day:02d}"


def with_day_of_month(d: date, day: int, months: int = 0) -> date:
    """
    Move ``months`` months from ``d`` and set the day of month to ``day``.

    The day is clamped to the length of the target month, so day 31 in
    February lands on the 28th (or 29th in leap years).
    """
    return d + relativedelta(months=months, day=day)
