"""Calendar-day helpers.

All date arithmetic works on plain ``datetime.date`` values computed in a
single reference timezone, so "today" is the same calendar day for every
client regardless of where the request came from.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

import pytz

from gamenight.core.config import settings

# Financial year ends on 30 June
MEMBERSHIP_YEAR_END_MONTH = 6
MEMBERSHIP_YEAR_END_DAY = 30


def today(timezone: Optional[str] = None) -> date:
    """Return the current calendar day in the reference timezone."""
    tz = pytz.timezone(timezone or settings.REFERENCE_TIMEZONE)
    return datetime.now(pytz.UTC).astimezone(tz).date()


def utc_now() -> datetime:
    """Return the current timestamp as an aware UTC datetime."""
    return datetime.now(pytz.UTC)


def next_weekday(start: date, weekday: int) -> date:
    """Return the first day on or after ``start`` falling on ``weekday``."""
    return start + timedelta(days=(weekday - start.weekday()) % 7)


def sorted_unique(days: Iterable[date]) -> List[date]:
    return sorted(set(days))


def membership_expiry(paid: date) -> date:
    """
    Return the last day covered by a membership payment.

    Payments on or after 1 July cover the financial year ending 30 June of
    the next calendar year; earlier payments expire on 30 June of the same
    year.
    """
    year = paid.year + 1 if paid.month > MEMBERSHIP_YEAR_END_MONTH else paid.year
    return date(year, MEMBERSHIP_YEAR_END_MONTH, MEMBERSHIP_YEAR_END_DAY)
