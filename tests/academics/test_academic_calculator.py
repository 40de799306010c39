from datetime import date

import pytest

from teacher_performance.academics.calculator import AcademicMetricsCalculator
from teacher_performance.academics.model import ExamMarkEntry
from teacher_performance.teachers.model import TeachingAssignment

DAY = date(2024, 3, 10)


def _mark(subject_id, class_id, section_id, percentage):
    return ExamMarkEntry(subject_id=subject_id, class_id=class_id, section_id=section_id, percentage=percentage, recorded_date=DAY)


def test_no_marks_falls_back_to_full_score():
    assignments = [TeachingAssignment(teacher_id=1, subject_id=1, class_id=10, section_id=1)]

    metrics = AcademicMetricsCalculator().calculate(assignments, [])

    assert metrics.avg_test_percentage == 100.0
    assert metrics.test_average_score == pytest.approx(5.5)
    assert not metrics.measured


def test_average_of_per_assignment_averages():
    assignments = [
        TeachingAssignment(teacher_id=1, subject_id=1, class_id=10, section_id=1),
        TeachingAssignment(teacher_id=1, subject_id=2, class_id=10, section_id=1),
    ]
    marks = [
        _mark(1, 10, 1, 80),
        _mark(1, 10, 1, 90),
        _mark(2, 10, 1, 60),
        # another teacher's class
        _mark(3, 11, 2, 10),
    ]

    metrics = AcademicMetricsCalculator().calculate(assignments, marks)

    assert metrics.assignments_with_marks == 2
    assert metrics.avg_test_percentage == pytest.approx(72.5)
    assert metrics.test_average_score == pytest.approx(3.9875)


def test_assignment_without_marks_is_left_out_of_the_mean():
    assignments = [
        TeachingAssignment(teacher_id=1, subject_id=1, class_id=10, section_id=1),
        TeachingAssignment(teacher_id=1, subject_id=2, class_id=10, section_id=1),
    ]

    metrics = AcademicMetricsCalculator().calculate(assignments, [_mark(1, 10, 1, 50)])

    assert metrics.avg_test_percentage == pytest.approx(50.0)


def test_inactive_assignment_is_ignored():
    assignments = [
        TeachingAssignment(teacher_id=1, subject_id=1, class_id=10, section_id=1, is_active=False),
    ]

    metrics = AcademicMetricsCalculator().calculate(assignments, [_mark(1, 10, 1, 40)])

    assert metrics.test_average_score == pytest.approx(5.5)


def test_out_of_range_percentages_are_clamped():
    assignments = [TeachingAssignment(teacher_id=1, subject_id=1, class_id=10, section_id=1)]

    metrics = AcademicMetricsCalculator().calculate(assignments, [_mark(1, 10, 1, 120)])

    assert metrics.test_average_score == pytest.approx(5.5)
