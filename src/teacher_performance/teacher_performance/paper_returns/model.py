from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import CheckingQuality


@dataclass(frozen=True)
class TestReturnEntry:
    """A marked test paper a teacher owes back to the class."""

    __test__ = False

    teacher_id: int
    exam_date: date
    return_date: Optional[date] = None
    checking_quality: CheckingQuality = CheckingQuality.GOOD
    test_return_id: Optional[int] = None
    teacher_name: str = ""
    exam_name: str = ""
    subject_name: str = ""
    campus_id: Optional[int] = None


@dataclass(frozen=True)
class TestReturnMetrics:
    __test__ = False

    total_tests_to_return: int
    tests_returned_on_time: int
    good_checking_count: int
    better_checking_count: int
    bad_checking_count: int
    test_return_score: float
    checking_quality_score: float

    @property
    def measured(self) -> bool:
        return self.total_tests_to_return > 0


@dataclass(frozen=True)
class TeacherReturnRow:
    teacher_id: int
    teacher_name: str
    tests_assigned: int
    tests_returned: int
    on_time_returns: int
    on_time_percentage: float
    most_common_quality: str


@dataclass(frozen=True)
class RecentReturnRow:
    test_return_id: Optional[int]
    exam_name: str
    subject_name: str
    teacher_name: str
    exam_date: date
    return_date: Optional[date]
    is_returned_on_time: bool
    checking_quality: str
    days_late: int


@dataclass(frozen=True)
class PaperReturnSummary:
    month: int
    year: int
    campus_id: Optional[int]
    total_tests_scheduled: int
    tests_returned_on_time: int
    tests_returned_late: int
    tests_pending_return: int
    on_time_return_percentage: float
    good_checking_count: int
    better_checking_count: int
    bad_checking_count: int
    teachers: list[TeacherReturnRow] = field(default_factory=list)
    recent_returns: list[RecentReturnRow] = field(default_factory=list)
