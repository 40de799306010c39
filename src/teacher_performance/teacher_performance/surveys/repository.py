from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import SurveyAnswer


class SurveyRepository(Protocol):
    def get_survey_answers(self, teacher_id: int, period_start: date, period_end: date) -> Sequence[SurveyAnswer]:
        raise NotImplementedError
