from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ExamMarkEntry
from .repository import ExamMarkRepository


class MySQLExamMarkRepository(ExamMarkRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_exam_marks(
        self,
        subject_id: int,
        class_id: int,
        section_id: int,
        period_start: date,
        period_end: date,
    ) -> Sequence[ExamMarkEntry]:
        # created_at is a DATETIME; the whole last day belongs to the period.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, subject_id, class_id, section_id, percentage, created_at
                FROM exam_marks
                WHERE subject_id=%s AND class_id=%s AND section_id=%s
                  AND created_at >= %s AND created_at < %s
                ORDER BY created_at, exam_mark_id
                """,
                (int(subject_id), int(class_id), int(section_id), period_start, period_end + timedelta(days=1)),
            )
            return [
                ExamMarkEntry(
                    student_id=int(r["student_id"]),
                    subject_id=int(r["subject_id"]),
                    class_id=int(r["class_id"]),
                    section_id=int(r["section_id"]),
                    percentage=float(r["percentage"]),
                    recorded_date=r["created_at"].date(),
                )
                for r in fetchall(cur)
            ]
