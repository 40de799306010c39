from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    def get_attendance_entries(self, employee_id: int, period_start: date, period_end: date) -> Sequence[AttendanceEntry]:
        raise NotImplementedError
