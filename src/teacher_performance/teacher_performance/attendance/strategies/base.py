from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Optional

from ...core.enums import AttendanceStatus
from ...teachers.model import Teacher
from ..model import AttendanceEntry


class PunctualityRule(ABC):
    """Strategy Pattern: how long after shift start a check-in still counts as on time."""

    @abstractmethod
    def tolerance(self, teacher: Teacher) -> timedelta:
        raise NotImplementedError

    def deadline(self, teacher: Teacher, work_date: date) -> Optional[datetime]:
        """Latest on-time check-in for the shift that starts on work_date."""
        if teacher.shift_start is None:
            return None
        return datetime.combine(work_date, teacher.shift_start) + self.tolerance(teacher)

    def is_on_time(self, entry: AttendanceEntry, teacher: Teacher) -> bool:
        """Only a timely Present counts; Late and tardy Present both fail."""
        if entry.status != AttendanceStatus.PRESENT or entry.time_in is None:
            return False
        deadline = self.deadline(teacher, entry.work_date)
        return deadline is not None and entry.time_in <= deadline
