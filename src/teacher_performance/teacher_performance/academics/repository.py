from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import ExamMarkEntry


class ExamMarkRepository(Protocol):
    def get_exam_marks(
        self,
        subject_id: int,
        class_id: int,
        section_id: int,
        period_start: date,
        period_end: date,
    ) -> Sequence[ExamMarkEntry]:
        raise NotImplementedError
