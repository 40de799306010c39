from __future__ import annotations

from typing import Iterable

from ..common.records import only_active
from ..core.constants import SURVEY_WEIGHT
from ..teachers.model import TeachingAssignment
from .model import SurveyAnswer, SurveyMetrics


class SurveyMetricsCalculator:
    """Positive-response ratio (6.0) over students of the teacher's classes.

    Each answer is counted once, even when several assignments share its
    class/section. No respondents means no negative signal: full marks.
    """

    def calculate(self, assignments: Iterable[TeachingAssignment], answers: Iterable[SurveyAnswer]) -> SurveyMetrics:
        class_sections = {a.class_section for a in only_active(assignments)}

        total = 0
        positive = 0
        for answer in answers:
            if answer.class_section not in class_sections:
                continue
            total += 1
            if answer.response:
                positive += 1

        return SurveyMetrics(
            total_responses=total,
            positive_responses=positive,
            survey_score=positive * SURVEY_WEIGHT / total if total else SURVEY_WEIGHT,
        )
