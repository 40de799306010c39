from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import CheckingQuality
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import TestReturnEntry
from .repository import TestReturnRepository


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def _to_entry(r: Dict[str, Any]) -> TestReturnEntry:
    return TestReturnEntry(
        test_return_id=int(r["test_return_id"]),
        teacher_id=int(r["teacher_id"]),
        exam_date=_as_date(r["exam_date"]),
        return_date=_as_date(r.get("return_date")),
        checking_quality=CheckingQuality(r["checking_quality"]),
        teacher_name=r.get("teacher_name") or "",
        exam_name=r.get("exam_name") or "",
        subject_name=r.get("subject_name") or "",
        campus_id=r.get("campus_id"),
    )


_SELECT = """
    SELECT tr.test_return_id, tr.teacher_id, tr.exam_date, tr.return_date, tr.checking_quality,
           e.full_name AS teacher_name, tr.exam_name, tr.subject_name, tr.campus_id
    FROM test_returns tr
    JOIN employees e ON e.employee_id = tr.teacher_id
"""


class MySQLTestReturnRepository(TestReturnRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_test_returns(self, teacher_id: int, period_start: date, period_end: date) -> Sequence[TestReturnEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE tr.teacher_id=%s AND tr.is_active=1
                  AND tr.exam_date BETWEEN %s AND %s
                ORDER BY tr.exam_date, tr.test_return_id
                """,
                (int(teacher_id), period_start, period_end),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_returns(self, *, campus_id: Optional[int], period_start: date, period_end: date) -> Sequence[TestReturnEntry]:
        clauses = ["tr.is_active=1", "tr.exam_date BETWEEN %s AND %s"]
        params: list[object] = [period_start, period_end]
        if campus_id is not None:
            clauses.append("tr.campus_id=%s")
            params.append(int(campus_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY tr.exam_date, tr.test_return_id",
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]
