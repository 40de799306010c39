from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ExamMarkEntry:
    subject_id: int
    class_id: int
    section_id: int
    percentage: float
    recorded_date: date
    student_id: int = 0

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.subject_id, self.class_id, self.section_id)


@dataclass(frozen=True)
class AcademicMetrics:
    assignments_with_marks: int
    avg_test_percentage: float
    test_average_score: float

    @property
    def measured(self) -> bool:
        return self.assignments_with_marks > 0
