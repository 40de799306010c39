from __future__ import annotations

from typing import Optional

from ..academics.calculator import AcademicMetricsCalculator
from ..academics.model import AcademicMetrics, ExamMarkEntry
from ..academics.repository import ExamMarkRepository
from ..attendance.calculator import AttendanceMetricsCalculator
from ..attendance.model import AttendanceMetrics
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.records import only_active
from ..holidays.model import WorkingCalendar
from ..paper_returns.calculator import TestReturnMetricsCalculator
from ..paper_returns.model import TestReturnMetrics
from ..paper_returns.repository import TestReturnRepository
from ..surveys.calculator import SurveyMetricsCalculator
from ..surveys.model import SurveyMetrics
from ..surveys.repository import SurveyRepository
from ..teachers.model import Teacher
from ..teachers.repository import TeacherRepository
from .model import PerformanceResult


class PerformanceScoreAggregator:
    """Pure combination of the calculators' outputs into one score card."""

    def aggregate(
        self,
        *,
        teacher: Teacher,
        month: int,
        year: int,
        attendance: AttendanceMetrics,
        academic: AcademicMetrics,
        survey: SurveyMetrics,
        returns: TestReturnMetrics,
    ) -> PerformanceResult:
        total = (
            attendance.attendance_score
            + attendance.punctuality_score
            + academic.test_average_score
            + survey.survey_score
            + returns.test_return_score
            + returns.checking_quality_score
        )

        measured = []
        if attendance.working_days:
            measured.append("attendance")
        if academic.measured:
            measured.append("academic")
        if survey.measured:
            measured.append("survey")
        if returns.measured:
            measured.append("test_return")

        return PerformanceResult(
            teacher_id=teacher.teacher_id,
            teacher_name=teacher.full_name,
            campus_id=teacher.campus_id,
            month=month,
            year=year,
            attendance_score=attendance.attendance_score,
            punctuality_score=attendance.punctuality_score,
            test_average_score=academic.test_average_score,
            survey_score=survey.survey_score,
            test_return_score=returns.test_return_score,
            checking_quality_score=returns.checking_quality_score,
            total_score=total,
            total_working_days=attendance.working_days,
            attended_days=attendance.attended_days,
            on_time_days=attendance.on_time_days,
            average_test_marks=academic.avg_test_percentage,
            total_survey_responses=survey.total_responses,
            positive_survey_responses=survey.positive_responses,
            tests_returned_on_time=returns.tests_returned_on_time,
            total_tests_to_return=returns.total_tests_to_return,
            good_checking_count=returns.good_checking_count,
            better_checking_count=returns.better_checking_count,
            bad_checking_count=returns.bad_checking_count,
            measured_metrics=tuple(measured),
        )


class TeacherScorer:
    """Reads one teacher's month of source data and scores it.

    Holds no mutable state, so one instance is shared by all worker threads.
    """

    def __init__(
        self,
        teachers: TeacherRepository,
        attendance: AttendanceRepository,
        exam_marks: ExamMarkRepository,
        surveys: SurveyRepository,
        test_returns: TestReturnRepository,
        *,
        attendance_calculator: Optional[AttendanceMetricsCalculator] = None,
        academic_calculator: Optional[AcademicMetricsCalculator] = None,
        survey_calculator: Optional[SurveyMetricsCalculator] = None,
        test_return_calculator: Optional[TestReturnMetricsCalculator] = None,
        aggregator: Optional[PerformanceScoreAggregator] = None,
    ):
        self._teachers = teachers
        self._attendance = attendance
        self._exam_marks = exam_marks
        self._surveys = surveys
        self._test_returns = test_returns
        self._attendance_calc = attendance_calculator or AttendanceMetricsCalculator()
        self._academic_calc = academic_calculator or AcademicMetricsCalculator()
        self._survey_calc = survey_calculator or SurveyMetricsCalculator()
        self._return_calc = test_return_calculator or TestReturnMetricsCalculator()
        self._aggregator = aggregator or PerformanceScoreAggregator()

    def score(self, teacher: Teacher, calendar: WorkingCalendar) -> PerformanceResult:
        start, end = month_bounds(calendar.year, calendar.month)

        entries = self._attendance.get_attendance_entries(teacher.teacher_id, start, end)
        attendance = self._attendance_calc.calculate(teacher, calendar, entries)

        assignments = list(self._teachers.get_active_assignments(teacher.teacher_id))
        marks: list[ExamMarkEntry] = []
        for subject_id, class_id, section_id in dict.fromkeys(a.key for a in only_active(assignments)):
            marks.extend(self._exam_marks.get_exam_marks(subject_id, class_id, section_id, start, end))
        academic = self._academic_calc.calculate(assignments, marks)

        answers = self._surveys.get_survey_answers(teacher.teacher_id, start, end)
        survey = self._survey_calc.calculate(assignments, answers)

        returns = self._return_calc.calculate(self._test_returns.get_test_returns(teacher.teacher_id, start, end))

        return self._aggregator.aggregate(
            teacher=teacher,
            month=calendar.month,
            year=calendar.year,
            attendance=attendance,
            academic=academic,
            survey=survey,
            returns=returns,
        )
