from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import HolidayRange


class HolidayRepository(Protocol):
    def get_holiday_ranges(self, campus_id: Optional[int], month_start: date, month_end: date) -> Sequence[HolidayRange]:
        """Calendar events of the campus overlapping [month_start, month_end]."""

        raise NotImplementedError
