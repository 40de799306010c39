import pytest

from fakes import make_teacher
from teacher_performance.academics.model import AcademicMetrics
from teacher_performance.attendance.model import AttendanceMetrics
from teacher_performance.core.constants import MAX_TOTAL_SCORE
from teacher_performance.paper_returns.model import TestReturnMetrics
from teacher_performance.performance.scorer import PerformanceScoreAggregator
from teacher_performance.surveys.model import SurveyMetrics


def _returns(total, on_time, score, quality):
    return TestReturnMetrics(
        total_tests_to_return=total,
        tests_returned_on_time=on_time,
        good_checking_count=total,
        better_checking_count=0,
        bad_checking_count=0,
        test_return_score=score,
        checking_quality_score=quality,
    )


def test_total_is_exact_sum_of_sub_scores():
    result = PerformanceScoreAggregator().aggregate(
        teacher=make_teacher(1, "Alice"),
        month=3,
        year=2024,
        attendance=AttendanceMetrics(20, 18, 15, 3.15, 1.875),
        academic=AcademicMetrics(2, 72.5, 3.9875),
        survey=SurveyMetrics(4, 3, 4.5),
        returns=_returns(4, 2, 0.75, 0.7),
    )

    assert result.total_score == sum(result.sub_scores)
    assert result.total_score == pytest.approx(3.15 + 1.875 + 3.9875 + 4.5 + 0.75 + 0.7)
    assert 0 <= result.total_score <= MAX_TOTAL_SCORE
    assert result.measured_metrics == ("attendance", "academic", "survey", "test_return")
    assert (result.teacher_id, result.campus_id, result.month, result.year) == (1, 1, 3, 2024)


def test_fallbacks_are_flagged_as_unmeasured():
    result = PerformanceScoreAggregator().aggregate(
        teacher=make_teacher(1, "Alice"),
        month=3,
        year=2024,
        attendance=AttendanceMetrics(20, 20, 20, 3.5, 2.5),
        academic=AcademicMetrics(0, 100.0, 5.5),
        survey=SurveyMetrics(0, 0, 6.0),
        returns=_returns(0, 0, 1.5, 1.0),
    )

    assert result.total_score == pytest.approx(MAX_TOTAL_SCORE)
    assert result.measured_metrics == ("attendance",)
