from datetime import date

import pytest

from teacher_performance.core.enums import CheckingQuality
from teacher_performance.paper_returns.calculator import TestReturnMetricsCalculator
from teacher_performance.paper_returns.model import TestReturnEntry
from teacher_performance.paper_returns.timeliness import days_late, is_returned_on_time


def test_return_after_flexibility_window_is_late():
    entry = TestReturnEntry(teacher_id=1, exam_date=date(2024, 3, 1), return_date=date(2024, 3, 6))

    assert not is_returned_on_time(entry, flexibility_days=3)
    assert days_late(entry, flexibility_days=3) == 2


def test_return_on_last_allowed_day_is_on_time():
    entry = TestReturnEntry(teacher_id=1, exam_date=date(2024, 3, 1), return_date=date(2024, 3, 4))

    assert is_returned_on_time(entry, flexibility_days=3)
    assert days_late(entry, flexibility_days=3) == 0


def test_unreturned_paper_is_never_on_time():
    entry = TestReturnEntry(teacher_id=1, exam_date=date(2024, 3, 1))

    assert not is_returned_on_time(entry)
    assert days_late(entry) == 0


def test_nothing_to_return_gives_full_marks():
    metrics = TestReturnMetricsCalculator().calculate([])

    assert metrics.test_return_score == pytest.approx(1.5)
    assert metrics.checking_quality_score == pytest.approx(1.0)
    assert not metrics.measured


def test_mixed_returns():
    entries = [
        TestReturnEntry(1, date(2024, 3, 1), date(2024, 3, 2), CheckingQuality.BETTER),
        TestReturnEntry(1, date(2024, 3, 5), date(2024, 3, 8), CheckingQuality.GOOD),
        TestReturnEntry(1, date(2024, 3, 10), date(2024, 3, 20), CheckingQuality.GOOD),
        TestReturnEntry(1, date(2024, 3, 12), None, CheckingQuality.BAD),
    ]

    metrics = TestReturnMetricsCalculator(return_flexibility_days=3).calculate(entries)

    assert metrics.total_tests_to_return == 4
    assert metrics.tests_returned_on_time == 2
    assert (metrics.good_checking_count, metrics.better_checking_count, metrics.bad_checking_count) == (2, 1, 1)
    assert metrics.test_return_score == pytest.approx(0.75)
    assert metrics.checking_quality_score == pytest.approx(0.6)


def test_checking_quality_is_capped_at_weight():
    entries = [TestReturnEntry(1, date(2024, 3, 1), date(2024, 3, 2), CheckingQuality.BETTER)] * 3

    metrics = TestReturnMetricsCalculator().calculate(entries)

    assert metrics.checking_quality_score == pytest.approx(1.0)
    assert metrics.test_return_score == pytest.approx(1.5)


def test_wider_flexibility_turns_late_returns_on_time():
    entries = [TestReturnEntry(1, date(2024, 3, 1), date(2024, 3, 6))]

    assert TestReturnMetricsCalculator(return_flexibility_days=3).calculate(entries).tests_returned_on_time == 0
    assert TestReturnMetricsCalculator(return_flexibility_days=5).calculate(entries).tests_returned_on_time == 1
