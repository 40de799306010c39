from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import HolidayRange
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_holiday_ranges(self, campus_id: Optional[int], month_start: date, month_end: date) -> Sequence[HolidayRange]:
        if campus_id is None:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT campus_id, event_name, start_date, end_date, is_holiday, is_active
                FROM calendar_events
                WHERE campus_id=%s
                  AND is_holiday=1 AND is_active=1
                  AND start_date <= %s
                  AND (end_date IS NULL OR end_date >= %s)
                ORDER BY start_date
                """,
                (int(campus_id), month_end, month_start),
            )
            rows = fetchall(cur)
            return [
                HolidayRange(
                    campus_id=int(r["campus_id"]),
                    event_name=r.get("event_name") or "",
                    start_date=r["start_date"],
                    end_date=r.get("end_date"),
                    is_holiday=bool(r["is_holiday"]),
                    is_active=bool(r["is_active"]),
                )
                for r in rows
            ]
