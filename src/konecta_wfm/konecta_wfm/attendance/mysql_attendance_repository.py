from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceSession, TeamAttendanceRow
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, user_id, shift_date, clock_in, clock_out, "
    "worked_seconds, is_late, is_early_logout, overtime_seconds"
)


def _to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        shift_date=r["shift_date"],
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        worked_seconds=int(r["worked_seconds"]) if r.get("worked_seconds") is not None else None,
        is_late=bool(r["is_late"]),
        is_early_logout=bool(r["is_early_logout"]),
        overtime_seconds=int(r.get("overtime_seconds") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s AND clock_out IS NULL
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def create_clock_in(
        self,
        *,
        user_id: int,
        shift_date: date,
        clock_in: datetime,
        is_late: bool,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(user_id, shift_date, clock_in, is_late)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(user_id), shift_date, clock_in, int(bool(is_late))),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_attendance_one_open: a concurrent clock-in won the race.
            if is_duplicate_key(e):
                return 0
            raise

    def close_session(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        worked_seconds: int,
        is_early_logout: bool,
        overtime_seconds: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET clock_out=%s, worked_seconds=%s, is_early_logout=%s, overtime_seconds=%s
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (clock_out, int(worked_seconds), int(bool(is_early_logout)), int(overtime_seconds), int(attendance_id)),
            )
            return cur.rowcount > 0

    def get_history_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceSession]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start is not None:
            clauses.append("clock_in >= %s")
            params.append(start)
        if end is not None:
            clauses.append("clock_in <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {where}
                ORDER BY clock_in DESC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_team_for_day(self, *, manager_id: int, day: date) -> Sequence[TeamAttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.full_name,
                       a.clock_in, a.clock_out, a.worked_seconds,
                       a.is_late, a.is_early_logout, a.overtime_seconds
                FROM users u
                LEFT JOIN attendance a ON a.user_id = u.user_id AND a.shift_date = %s
                WHERE u.manager_id = %s
                ORDER BY u.full_name, a.clock_in
                """,
                (day, int(manager_id)),
            )
            return [
                TeamAttendanceRow(
                    user_id=int(r["user_id"]),
                    full_name=r["full_name"],
                    clock_in=r.get("clock_in"),
                    clock_out=r.get("clock_out"),
                    worked_seconds=int(r["worked_seconds"]) if r.get("worked_seconds") is not None else None,
                    is_late=bool(r.get("is_late")),
                    is_early_logout=bool(r.get("is_early_logout")),
                    overtime_seconds=int(r.get("overtime_seconds") or 0),
                )
                for r in fetchall(cur)
            ]
