from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class HolidayRange:
    """Campus calendar event; only active holidays remove working days."""

    campus_id: int
    start_date: date
    end_date: Optional[date] = None
    is_holiday: bool = True
    is_active: bool = True
    event_name: str = ""

    @property
    def last_date(self) -> date:
        return self.end_date or self.start_date

    @property
    def blocks_work(self) -> bool:
        return self.is_holiday and self.is_active

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.last_date


@dataclass(frozen=True)
class WorkingCalendar:
    campus_id: Optional[int]
    month: int
    year: int
    dates: tuple[date, ...]

    @property
    def working_days(self) -> int:
        return len(self.dates)

    def __contains__(self, day: object) -> bool:
        return day in self.dates
