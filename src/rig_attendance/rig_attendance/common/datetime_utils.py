from __future__ import annotations

import calendar
from datetime import datetime


def days_in_month(month: int, year: int) -> int:
    """Number of days in the month, Gregorian leap-year rules."""
    return calendar.monthrange(int(year), int(month))[1]


def month_name(month: int) -> str:
    return calendar.month_name[int(month)]


def is_future_month(month: int, year: int, *, now: datetime) -> bool:
    """True when (month, year) lies strictly after the month of `now`."""
    return (int(year), int(month)) > (now.year, now.month)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
