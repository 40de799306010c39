from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.validators import require_month, require_year


@dataclass(frozen=True)
class RecalculationScope:
    """(campus or all campuses, month, year) a recomputation is keyed on."""

    campus_id: Optional[int]
    month: int
    year: int

    @classmethod
    def of(cls, campus_id: Optional[int], month: Any, year: Any) -> "RecalculationScope":
        return cls(
            campus_id=int(campus_id) if campus_id else None,
            month=require_month(month),
            year=require_year(year),
        )

    @property
    def period_lock_name(self) -> str:
        """Database lock name; whole-month granularity so 'all' and a campus never interleave."""
        return f"teacher_performance:{self.year:04d}-{self.month:02d}"

    def overlaps(self, other: "RecalculationScope") -> bool:
        if (self.month, self.year) != (other.month, other.year):
            return False
        return self.campus_id is None or other.campus_id is None or self.campus_id == other.campus_id

    def contains(self, result: "PerformanceResult") -> bool:
        if (result.month, result.year) != (self.month, self.year):
            return False
        return self.campus_id is None or result.campus_id == self.campus_id

    def __str__(self) -> str:
        campus = "all" if self.campus_id is None else str(self.campus_id)
        return f"campus={campus} {self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class PerformanceResult:
    """Monthly score card of one teacher (20 marks max)."""

    teacher_id: int
    teacher_name: str
    campus_id: int
    month: int
    year: int

    attendance_score: float
    punctuality_score: float
    test_average_score: float
    survey_score: float
    test_return_score: float
    checking_quality_score: float
    total_score: float

    total_working_days: int
    attended_days: int
    on_time_days: int
    average_test_marks: float
    total_survey_responses: int
    positive_survey_responses: int
    tests_returned_on_time: int
    total_tests_to_return: int
    good_checking_count: int
    better_checking_count: int
    bad_checking_count: int

    # Sub-metrics that had real samples; the rest got the full-marks fallback.
    measured_metrics: tuple[str, ...] = ()

    performance_id: Optional[int] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def sub_scores(self) -> tuple[float, ...]:
        return (
            self.attendance_score,
            self.punctuality_score,
            self.test_average_score,
            self.survey_score,
            self.test_return_score,
            self.checking_quality_score,
        )

    def scores_key(self) -> tuple:
        """Everything the computation decides; ignores storage/audit columns."""
        data = asdict(self)
        for name in ("performance_id", "created_by", "created_at"):
            data.pop(name)
        return tuple(sorted(data.items()))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["measured_metrics"] = list(self.measured_metrics)
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        return data
