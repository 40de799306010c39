from __future__ import annotations

from typing import Iterable

from ..core.constants import (
    BAD_CHECKING_POINTS,
    BETTER_CHECKING_POINTS,
    CHECKING_QUALITY_WEIGHT,
    DEFAULT_RETURN_FLEXIBILITY_DAYS,
    GOOD_CHECKING_POINTS,
    TEST_RETURN_WEIGHT,
)
from ..core.enums import CheckingQuality
from .model import TestReturnEntry, TestReturnMetrics
from .timeliness import is_returned_on_time


class TestReturnMetricsCalculator:
    """Return timeliness (1.5) and checking quality (1.0).

    With nothing to return both sub-scores fall back to their maximum.
    """

    __test__ = False

    def __init__(self, return_flexibility_days: int = DEFAULT_RETURN_FLEXIBILITY_DAYS):
        self._flexibility_days = int(return_flexibility_days)

    def calculate(self, entries: Iterable[TestReturnEntry]) -> TestReturnMetrics:
        entries = list(entries)
        total = len(entries)
        on_time = sum(1 for e in entries if is_returned_on_time(e, self._flexibility_days))
        good = sum(1 for e in entries if e.checking_quality == CheckingQuality.GOOD)
        better = sum(1 for e in entries if e.checking_quality == CheckingQuality.BETTER)
        bad = sum(1 for e in entries if e.checking_quality == CheckingQuality.BAD)

        if total == 0:
            return TestReturnMetrics(
                total_tests_to_return=0,
                tests_returned_on_time=0,
                good_checking_count=0,
                better_checking_count=0,
                bad_checking_count=0,
                test_return_score=TEST_RETURN_WEIGHT,
                checking_quality_score=CHECKING_QUALITY_WEIGHT,
            )

        points = better * BETTER_CHECKING_POINTS + good * GOOD_CHECKING_POINTS + bad * BAD_CHECKING_POINTS
        return TestReturnMetrics(
            total_tests_to_return=total,
            tests_returned_on_time=on_time,
            good_checking_count=good,
            better_checking_count=better,
            bad_checking_count=bad,
            test_return_score=on_time * TEST_RETURN_WEIGHT / total,
            checking_quality_score=min(CHECKING_QUALITY_WEIGHT, points / total),
        )
