from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AuxType, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LiveRow
from .repository import WallboardRepository


class MySQLWallboardRepository(WallboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_live_rows(self, *, day: date, manager_id: Optional[int] = None) -> Sequence[LiveRow]:
        team_filter = "AND u.manager_id=%s" if manager_id is not None else ""
        params = [day, day, Role.AGENT.value]
        if manager_id is not None:
            params.append(int(manager_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT u.user_id, u.full_name,
                       a.clock_in, a.clock_out, a.is_late,
                       s.shift_end,
                       (SELECT ax.aux_type FROM auxlogs ax
                         WHERE ax.user_id = u.user_id AND ax.end_time IS NULL
                         ORDER BY ax.start_time DESC LIMIT 1) AS current_aux
                FROM users u
                LEFT JOIN attendance a
                  ON a.attendance_id = (
                      SELECT MAX(a2.attendance_id) FROM attendance a2
                      WHERE a2.user_id = u.user_id AND a2.shift_date = %s
                  )
                LEFT JOIN schedules s ON s.user_id = u.user_id AND s.work_date = %s
                WHERE u.role=%s AND u.is_active=1 {team_filter}
                ORDER BY u.full_name
                """,
                tuple(params),
            )
            return [
                LiveRow(
                    user_id=int(r["user_id"]),
                    full_name=r["full_name"],
                    clock_in=r.get("clock_in"),
                    clock_out=r.get("clock_out"),
                    is_late=bool(r.get("is_late") or False),
                    current_aux=AuxType(r["current_aux"]) if r.get("current_aux") else None,
                    shift_end=r.get("shift_end"),
                )
                for r in fetchall(cur)
            ]
