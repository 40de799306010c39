from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .academics.mysql_exam_mark_repository import MySQLExamMarkRepository
from .attendance.calculator import AttendanceMetricsCalculator
from .attendance.factory import PunctualityRuleFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .core.settings import ScoringSettings
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.resolver import WorkingCalendarResolver
from .paper_returns.calculator import TestReturnMetricsCalculator
from .paper_returns.mysql_test_return_repository import MySQLTestReturnRepository
from .paper_returns.summary import PaperReturnSummaryService
from .performance.mysql_performance_repository import MySQLPerformanceRepository
from .performance.scorer import TeacherScorer
from .performance.service import RecalculationOrchestrator
from .surveys.mysql_survey_repository import MySQLSurveyRepository
from .teachers.mysql_teacher_repository import MySQLTeacherRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    scoring: ScoringSettings

    recalculation_service: RecalculationOrchestrator
    paper_return_summary_service: PaperReturnSummaryService


def build_services(
    *,
    scoring: ScoringSettings,
    teachers,
    holidays,
    attendance,
    exam_marks,
    surveys,
    test_returns,
    performances,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    rule = PunctualityRuleFactory(
        grace_minutes=scoring.on_time_grace_minutes,
        extra_minutes=scoring.flexibility_extra_minutes,
    ).for_mode(scoring.punctuality_mode)

    scorer = TeacherScorer(
        teachers,
        attendance,
        exam_marks,
        surveys,
        test_returns,
        attendance_calculator=AttendanceMetricsCalculator(rule),
        test_return_calculator=TestReturnMetricsCalculator(scoring.return_flexibility_days),
    )
    recalculation_service = RecalculationOrchestrator(
        teachers,
        WorkingCalendarResolver(holidays),
        scorer,
        performances,
        max_workers=scoring.max_workers,
    )
    summary_service = PaperReturnSummaryService(
        test_returns,
        return_flexibility_days=scoring.return_flexibility_days,
    )

    return Container(
        conn=conn,
        scoring=scoring,
        recalculation_service=recalculation_service,
        paper_return_summary_service=summary_service,
    )


def build_container(*, db_config: dict, scoring: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_services(
        scoring=ScoringSettings.from_mapping(scoring),
        teachers=MySQLTeacherRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        exam_marks=MySQLExamMarkRepository(conn),
        surveys=MySQLSurveyRepository(conn),
        test_returns=MySQLTestReturnRepository(conn),
        performances=MySQLPerformanceRepository(conn),
        conn=conn,
    )
