from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Schedule
from .repository import ScheduleRepository


def _to_schedule(r: dict) -> Schedule:
    return Schedule(
        schedule_id=int(r["schedule_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        shift_start=r.get("shift_start"),
        shift_end=r.get("shift_end"),
        day_type=r.get("day_type") or "work",
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, *, user_id: int, work_date: date) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, user_id, work_date, shift_start, shift_end, day_type
                FROM schedules
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def upsert(
        self,
        *,
        user_id: int,
        work_date: date,
        shift_start: Optional[datetime],
        shift_end: Optional[datetime],
        day_type: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(user_id, work_date, shift_start, shift_end, day_type)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    shift_start=VALUES(shift_start),
                    shift_end=VALUES(shift_end),
                    day_type=VALUES(day_type)
                """,
                (int(user_id), work_date, shift_start, shift_end, day_type),
            )

            # If it was an update, lastrowid can be 0; fetch schedule_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT schedule_id FROM schedules WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return int(r["schedule_id"]) if r else 0

    def list_for_user(self, *, user_id: int, start: date, end: date) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, user_id, work_date, shift_start, shift_end, day_type
                FROM schedules
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def list_for_manager(self, *, manager_id: int, start: date, end: date) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sc.schedule_id, sc.user_id, sc.work_date, sc.shift_start, sc.shift_end, sc.day_type
                FROM schedules sc
                JOIN users u ON u.user_id = sc.user_id
                WHERE u.manager_id=%s AND sc.work_date BETWEEN %s AND %s
                ORDER BY sc.work_date ASC, u.full_name ASC
                """,
                (int(manager_id), start, end),
            )
            return [_to_schedule(r) for r in fetchall(cur)]
