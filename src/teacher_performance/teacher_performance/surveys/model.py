from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class SurveyAnswer:
    """Yes/no answer of a student; class/section is the student's current one."""

    student_id: int
    teacher_id: Optional[int]
    class_id: int
    section_id: int
    response: bool
    answered_date: date
    answer_id: Optional[int] = None

    @property
    def class_section(self) -> tuple[int, int]:
        return (self.class_id, self.section_id)


@dataclass(frozen=True)
class SurveyMetrics:
    total_responses: int
    positive_responses: int
    survey_score: float

    @property
    def measured(self) -> bool:
        return self.total_responses > 0
