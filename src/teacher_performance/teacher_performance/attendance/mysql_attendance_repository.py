from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEntry
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_attendance_entries(self, employee_id: int, period_start: date, period_end: date) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, status, time_in, time_out
                FROM employee_attendance
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(employee_id), period_start, period_end),
            )
            return [
                AttendanceEntry(
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    status=AttendanceStatus(r["status"]),
                    time_in=r.get("time_in"),
                    time_out=r.get("time_out"),
                )
                for r in fetchall(cur)
            ]
