from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month (both inclusive)."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def month_name(month: int) -> str:
    if 1 <= month <= 12:
        return calendar.month_name[month]
    return "Unknown"
