from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Sequence

from ..core.exceptions import CommitConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PerformanceResult, RecalculationScope
from .repository import PerformanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = (
    "teacher_id",
    "campus_id",
    "month",
    "year",
    "attendance_score",
    "punctuality_score",
    "test_average_score",
    "survey_score",
    "test_return_score",
    "checking_quality_score",
    "total_score",
    "total_working_days",
    "attended_days",
    "on_time_days",
    "average_test_marks",
    "total_survey_responses",
    "positive_survey_responses",
    "tests_returned_on_time",
    "total_tests_to_return",
    "good_checking_count",
    "better_checking_count",
    "bad_checking_count",
    "measured_metrics",
    "created_by",
    "created_at",
)

_SELECT = f"""
    SELECT tp.performance_id, e.full_name AS teacher_name, {", ".join("tp." + c for c in _COLUMNS)}
    FROM teacher_performances tp
    JOIN employees e ON e.employee_id = tp.teacher_id
"""


def _scope_where(scope: RecalculationScope, *, active_only: bool = True) -> tuple[str, list[object]]:
    clauses = ["tp.month=%s", "tp.year=%s"]
    if active_only:
        clauses.append("tp.is_active=1")
    params: list[object] = [scope.month, scope.year]
    if scope.campus_id is not None:
        clauses.append("tp.campus_id=%s")
        params.append(scope.campus_id)
    return " AND ".join(clauses), params


def _to_result(r: Dict[str, Any]) -> PerformanceResult:
    measured = tuple(m for m in (r.get("measured_metrics") or "").split(",") if m)
    return PerformanceResult(
        performance_id=int(r["performance_id"]),
        teacher_id=int(r["teacher_id"]),
        teacher_name=r["teacher_name"],
        campus_id=int(r["campus_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        attendance_score=float(r["attendance_score"]),
        punctuality_score=float(r["punctuality_score"]),
        test_average_score=float(r["test_average_score"]),
        survey_score=float(r["survey_score"]),
        test_return_score=float(r["test_return_score"]),
        checking_quality_score=float(r["checking_quality_score"]),
        total_score=float(r["total_score"]),
        total_working_days=int(r["total_working_days"]),
        attended_days=int(r["attended_days"]),
        on_time_days=int(r["on_time_days"]),
        average_test_marks=float(r["average_test_marks"]),
        total_survey_responses=int(r["total_survey_responses"]),
        positive_survey_responses=int(r["positive_survey_responses"]),
        tests_returned_on_time=int(r["tests_returned_on_time"]),
        total_tests_to_return=int(r["total_tests_to_return"]),
        good_checking_count=int(r["good_checking_count"]),
        better_checking_count=int(r["better_checking_count"]),
        bad_checking_count=int(r["bad_checking_count"]),
        measured_metrics=measured,
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
    )


class MySQLPerformanceRepository(PerformanceRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout_seconds: int = 0):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout_seconds)

    def replace_scope(
        self,
        scope: RecalculationScope,
        results: Sequence[PerformanceResult],
        *,
        created_by: str,
        created_at: datetime,
    ) -> int:
        rows = [
            (
                r.teacher_id,
                r.campus_id,
                r.month,
                r.year,
                r.attendance_score,
                r.punctuality_score,
                r.test_average_score,
                r.survey_score,
                r.test_return_score,
                r.checking_quality_score,
                r.total_score,
                r.total_working_days,
                r.attended_days,
                r.on_time_days,
                r.average_test_marks,
                r.total_survey_responses,
                r.positive_survey_responses,
                r.tests_returned_on_time,
                r.total_tests_to_return,
                r.good_checking_count,
                r.better_checking_count,
                r.bad_checking_count,
                ",".join(r.measured_metrics),
                created_by,
                created_at,
            )
            for r in results
        ]
        # Soft-deleted rows go too, they would collide with the unique key on insert.
        where, params = _scope_where(scope, active_only=False)

        # The named lock outlives the transaction: it is released only after COMMIT/ROLLBACK.
        with self._named_lock(scope):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE tp FROM teacher_performances tp WHERE {where}", tuple(params))
                deleted = cur.rowcount
                if rows:
                    cur.executemany(
                        f"INSERT INTO teacher_performances({', '.join(_COLUMNS)}) "
                        f"VALUES({', '.join(['%s'] * len(_COLUMNS))})",
                        rows,
                    )

        logger.info("replaced scope %s: deleted=%d inserted=%d", scope, deleted, len(rows))
        return len(rows)

    @contextmanager
    def _named_lock(self, scope: RecalculationScope) -> Iterator[None]:
        """MySQL GET_LOCK held on its own session; a busy lock is a conflict, not a wait."""
        lock_name = scope.period_lock_name
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor(dictionary=True)
            cur.execute("SELECT GET_LOCK(%s, %s) AS acquired", (lock_name, self._lock_timeout))
            got = fetchone(cur)
            if not got or int(got["acquired"] or 0) != 1:
                raise CommitConflictError(f"Scope {scope} is being recalculated by another process")
            try:
                yield
            finally:
                try:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (lock_name,))
                    cur.fetchall()
                except Exception:
                    # Closing the session below frees the lock too.
                    logger.warning("RELEASE_LOCK(%s) failed", lock_name, exc_info=True)
        finally:
            conn.close()

    def list_scope(self, scope: RecalculationScope) -> Sequence[PerformanceResult]:
        where, params = _scope_where(scope)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY tp.total_score DESC, tp.teacher_id", tuple(params))
            return [_to_result(r) for r in fetchall(cur)]

    def get_by_id(self, performance_id: int) -> Optional[PerformanceResult]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE tp.performance_id=%s", (int(performance_id),))
            r = fetchone(cur)
            return _to_result(r) if r else None
