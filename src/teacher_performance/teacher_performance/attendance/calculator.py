from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..core.constants import ATTENDANCE_WEIGHT, PUNCTUALITY_WEIGHT
from ..core.enums import AttendanceStatus
from ..holidays.model import WorkingCalendar
from ..teachers.model import Teacher
from .model import AttendanceEntry, AttendanceMetrics
from .strategies.base import PunctualityRule
from .strategies.fixed_strategy import FixedGraceRule


class AttendanceMetricsCalculator:
    """Attendance (3.5) and punctuality (2.5) sub-scores.

    Both ratios use working days as the denominator, so being absent and
    being late each cost punctuality. Entries outside the working calendar
    (Sundays, holidays) are ignored, which keeps both ratios within [0, 1].
    """

    def __init__(self, rule: Optional[PunctualityRule] = None):
        self._rule = rule or FixedGraceRule()

    def calculate(
        self,
        teacher: Teacher,
        calendar: WorkingCalendar,
        entries: Iterable[AttendanceEntry],
    ) -> AttendanceMetrics:
        working_days = calendar.working_days

        # One entry per day; the first one wins if the source ever repeats a date.
        by_day: dict[date, AttendanceEntry] = {}
        for entry in entries:
            if entry.employee_id == teacher.teacher_id and entry.work_date in calendar:
                by_day.setdefault(entry.work_date, entry)

        present = [e for e in by_day.values() if e.status == AttendanceStatus.PRESENT]
        attended_days = len(present)
        on_time_days = sum(1 for e in present if self._rule.is_on_time(e, teacher))

        if working_days == 0:
            return AttendanceMetrics(
                working_days=0,
                attended_days=attended_days,
                on_time_days=on_time_days,
                attendance_score=0.0,
                punctuality_score=0.0,
            )

        return AttendanceMetrics(
            working_days=working_days,
            attended_days=attended_days,
            on_time_days=on_time_days,
            attendance_score=attended_days * ATTENDANCE_WEIGHT / working_days,
            punctuality_score=on_time_days * PUNCTUALITY_WEIGHT / working_days,
        )
