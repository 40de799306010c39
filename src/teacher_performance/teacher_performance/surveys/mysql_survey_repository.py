from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import SurveyAnswer
from .repository import SurveyRepository


class MySQLSurveyRepository(SurveyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_survey_answers(self, teacher_id: int, period_start: date, period_end: date) -> Sequence[SurveyAnswer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sr.response_id, sr.student_id, sr.teacher_id, sr.response, sr.response_date,
                       s.class_id, s.section_id
                FROM student_survey_responses sr
                JOIN students s ON s.student_id = sr.student_id
                WHERE sr.teacher_id=%s
                  AND sr.response_date >= %s AND sr.response_date < %s
                ORDER BY sr.response_id
                """,
                (int(teacher_id), period_start, period_end + timedelta(days=1)),
            )
            return [
                SurveyAnswer(
                    answer_id=int(r["response_id"]),
                    student_id=int(r["student_id"]),
                    teacher_id=r.get("teacher_id"),
                    class_id=int(r["class_id"]),
                    section_id=int(r["section_id"]),
                    response=bool(r["response"]),
                    answered_date=r["response_date"].date(),
                )
                for r in fetchall(cur)
            ]
