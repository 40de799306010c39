from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import iter_dates, month_bounds
from ..common.validators import require_month, require_year
from .model import HolidayRange, WorkingCalendar
from .repository import HolidayRepository

SUNDAY = 6


def working_dates(start: date, end: date, holidays: Iterable[HolidayRange]) -> tuple[date, ...]:
    """Dates in [start, end] that are neither Sundays nor inside an active holiday."""
    blocking = [h for h in holidays if h.blocks_work]
    return tuple(
        d
        for d in iter_dates(start, end)
        if d.weekday() != SUNDAY and not any(h.covers(d) for h in blocking)
    )


class WorkingCalendarResolver:
    """Working days of a campus for one month."""

    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def resolve(self, campus_id: Optional[int], month: int, year: int) -> WorkingCalendar:
        month = require_month(month)
        year = require_year(year)
        start, end = month_bounds(year, month)
        ranges = self._holidays.get_holiday_ranges(campus_id, start, end)
        # The repository may hand back other campuses' events; only ours count.
        own = [h for h in ranges if campus_id is None or h.campus_id == campus_id]
        return WorkingCalendar(
            campus_id=campus_id,
            month=month,
            year=year,
            dates=working_dates(start, end, own),
        )
