from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import Teacher, TeachingAssignment
from .repository import TeacherRepository


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_teachers(self, campus_id: Optional[int] = None) -> Sequence[Teacher]:
        clauses = ["e.is_active=1", "e.role LIKE %s"]
        params: list[object] = ["%Teacher%"]
        if campus_id is not None:
            clauses.append("e.campus_id=%s")
            params.append(int(campus_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    e.employee_id, e.full_name, e.campus_id,
                    COALESCE(e.on_time, c.start_time) AS shift_start,
                    COALESCE(e.off_time, c.end_time) AS shift_end,
                    COALESCE(e.late_time_flexibility, 0) AS late_time_flexibility
                FROM employees e
                LEFT JOIN campuses c ON c.campus_id = e.campus_id
                WHERE {" AND ".join(clauses)}
                ORDER BY e.employee_id
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                Teacher(
                    teacher_id=int(r["employee_id"]),
                    full_name=r["full_name"],
                    campus_id=int(r["campus_id"]),
                    shift_start=normalize_mysql_time(r.get("shift_start")),
                    shift_end=normalize_mysql_time(r.get("shift_end")),
                    late_flexibility_minutes=int(r.get("late_time_flexibility") or 0),
                )
                for r in rows
            ]

    def get_active_assignments(self, teacher_id: int) -> Sequence[TeachingAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT teacher_id, subject_id, class_id, section_id, campus_id, is_active
                FROM teacher_assignments
                WHERE teacher_id=%s AND is_active=1
                ORDER BY subject_id, class_id, section_id
                """,
                (int(teacher_id),),
            )
            return [
                TeachingAssignment(
                    teacher_id=int(r["teacher_id"]),
                    subject_id=int(r["subject_id"]),
                    class_id=int(r["class_id"]),
                    section_id=int(r["section_id"]),
                    campus_id=r.get("campus_id"),
                    is_active=bool(r["is_active"]),
                )
                for r in fetchall(cur)
            ]
