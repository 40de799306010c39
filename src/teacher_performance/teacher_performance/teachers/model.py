from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Teacher:
    """Employee with a teaching role, as owned by the employee registry.

    shift_start is the employee's own on-time, else the campus start time.
    """

    teacher_id: int
    full_name: str
    campus_id: int
    shift_start: Optional[time] = None
    shift_end: Optional[time] = None
    late_flexibility_minutes: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class TeachingAssignment:
    teacher_id: int
    subject_id: int
    class_id: int
    section_id: int
    is_active: bool = True
    campus_id: Optional[int] = None

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.subject_id, self.class_id, self.section_id)

    @property
    def class_section(self) -> tuple[int, int]:
        return (self.class_id, self.section_id)
