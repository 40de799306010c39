from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import require_month, require_year
from ..core.constants import DEFAULT_RETURN_FLEXIBILITY_DAYS, SUMMARY_TEACHER_LIMIT
from ..core.enums import CheckingQuality
from .model import PaperReturnSummary, RecentReturnRow, TeacherReturnRow, TestReturnEntry
from .repository import TestReturnRepository
from .timeliness import days_late, is_returned_on_time

logger = logging.getLogger(__name__)


def _percentage(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


class PaperReturnSummaryService:
    """Monthly dashboard numbers for marked-paper returns."""

    def __init__(
        self,
        returns: TestReturnRepository,
        *,
        return_flexibility_days: int = DEFAULT_RETURN_FLEXIBILITY_DAYS,
        teacher_limit: int = SUMMARY_TEACHER_LIMIT,
        recent_limit: int = SUMMARY_TEACHER_LIMIT,
    ):
        self._returns = returns
        self._flexibility_days = int(return_flexibility_days)
        self._teacher_limit = int(teacher_limit)
        self._recent_limit = int(recent_limit)

    def _on_time(self, entry: TestReturnEntry) -> bool:
        return is_returned_on_time(entry, self._flexibility_days)

    def build(self, *, month: int, year: int, campus_id: Optional[int] = None) -> PaperReturnSummary:
        month = require_month(month)
        year = require_year(year)
        start, end = month_bounds(year, month)
        entries = list(self._returns.list_returns(campus_id=campus_id, period_start=start, period_end=end))
        logger.debug("paper return summary %s/%s campus=%s entries=%d", month, year, campus_id, len(entries))

        on_time = sum(1 for e in entries if self._on_time(e))
        late = sum(1 for e in entries if e.return_date is not None and not self._on_time(e))
        pending = sum(1 for e in entries if e.return_date is None)
        quality = Counter(e.checking_quality for e in entries)

        return PaperReturnSummary(
            month=month,
            year=year,
            campus_id=campus_id,
            total_tests_scheduled=len(entries),
            tests_returned_on_time=on_time,
            tests_returned_late=late,
            tests_pending_return=pending,
            on_time_return_percentage=_percentage(on_time, len(entries)),
            good_checking_count=quality[CheckingQuality.GOOD],
            better_checking_count=quality[CheckingQuality.BETTER],
            bad_checking_count=quality[CheckingQuality.BAD],
            teachers=self._teacher_rows(entries),
            recent_returns=self._recent_rows(entries),
        )

    def _teacher_rows(self, entries: list[TestReturnEntry]) -> list[TeacherReturnRow]:
        grouped: dict[int, list[TestReturnEntry]] = defaultdict(list)
        for e in entries:
            grouped[e.teacher_id].append(e)

        rows = []
        for teacher_id, group in grouped.items():
            on_time = sum(1 for e in group if self._on_time(e))
            # most_common keeps first-seen order on ties
            top_quality = Counter(e.checking_quality.value for e in group).most_common(1)
            rows.append(
                TeacherReturnRow(
                    teacher_id=teacher_id,
                    teacher_name=group[0].teacher_name,
                    tests_assigned=len(group),
                    tests_returned=sum(1 for e in group if e.return_date is not None),
                    on_time_returns=on_time,
                    on_time_percentage=_percentage(on_time, len(group)),
                    most_common_quality=top_quality[0][0] if top_quality else "N/A",
                )
            )

        rows.sort(key=lambda r: (-r.on_time_percentage, r.teacher_name.lower(), r.teacher_id))
        return rows[: self._teacher_limit]

    def _recent_rows(self, entries: list[TestReturnEntry]) -> list[RecentReturnRow]:
        recent = sorted(entries, key=lambda e: e.return_date or e.exam_date, reverse=True)
        return [
            RecentReturnRow(
                test_return_id=e.test_return_id,
                exam_name=e.exam_name,
                subject_name=e.subject_name,
                teacher_name=e.teacher_name,
                exam_date=e.exam_date,
                return_date=e.return_date,
                is_returned_on_time=self._on_time(e),
                checking_quality=e.checking_quality.value,
                days_late=days_late(e, self._flexibility_days),
            )
            for e in recent[: self._recent_limit]
        ]
