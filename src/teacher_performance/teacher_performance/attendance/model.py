from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one classified attendance day of an employee (read-only here)."""

    employee_id: int
    work_date: date
    status: AttendanceStatus
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceMetrics:
    working_days: int
    attended_days: int
    on_time_days: int
    attendance_score: float
    punctuality_score: float
