from __future__ import annotations

from collections import defaultdict
from statistics import fmean
from typing import Iterable

from ..common.records import only_active
from ..core.constants import FALLBACK_TEST_PERCENTAGE, TEST_AVERAGE_WEIGHT
from ..teachers.model import TeachingAssignment
from .model import AcademicMetrics, ExamMarkEntry


def _clamp_percentage(value: float) -> float:
    return min(max(float(value), 0.0), 100.0)


class AcademicMetricsCalculator:
    """Exam-average sub-score (5.5): mean of per-assignment mark averages.

    A teacher whose assignments have no marks in the period gets the
    benefit of the doubt (100%).
    """

    def calculate(
        self,
        assignments: Iterable[TeachingAssignment],
        marks: Iterable[ExamMarkEntry],
    ) -> AcademicMetrics:
        keys = list(dict.fromkeys(a.key for a in only_active(assignments)))

        by_key: dict[tuple[int, int, int], list[float]] = defaultdict(list)
        for mark in marks:
            by_key[mark.key].append(_clamp_percentage(mark.percentage))

        averages = [fmean(by_key[key]) for key in keys if by_key.get(key)]
        avg = fmean(averages) if averages else FALLBACK_TEST_PERCENTAGE

        return AcademicMetrics(
            assignments_with_marks=len(averages),
            avg_test_percentage=avg,
            test_average_score=avg * TEST_AVERAGE_WEIGHT / 100,
        )
