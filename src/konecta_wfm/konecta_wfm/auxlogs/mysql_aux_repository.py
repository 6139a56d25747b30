from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AuxType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AuxClosure, AuxLog
from .repository import AuxLogRepository

_COLUMNS = "aux_id, user_id, aux_type, start_time, end_time, duration_seconds, over_limit"

_CLOSE_SQL = """
    UPDATE auxlogs
    SET end_time=%s, duration_seconds=%s, over_limit=%s
    WHERE aux_id=%s AND end_time IS NULL
"""


def _to_aux(r: dict) -> AuxLog:
    return AuxLog(
        aux_id=int(r["aux_id"]),
        user_id=int(r["user_id"]),
        aux_type=AuxType(r["aux_type"]),
        start_time=r["start_time"],
        end_time=r.get("end_time"),
        duration_seconds=int(r["duration_seconds"]) if r.get("duration_seconds") is not None else None,
        over_limit=bool(r["over_limit"]),
    )


def _close_params(closure: AuxClosure) -> tuple:
    return (closure.end_time, int(closure.duration_seconds), int(bool(closure.over_limit)), int(closure.aux_id))


class MySQLAuxLogRepository(AuxLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, aux_id: int) -> Optional[AuxLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM auxlogs WHERE aux_id=%s", (int(aux_id),))
            r = fetchone(cur)
            return _to_aux(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[AuxLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM auxlogs
                WHERE user_id=%s AND end_time IS NULL
                ORDER BY start_time DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_aux(r) if r else None

    def count_started_on(self, *, user_id: int, aux_type: AuxType, day: date) -> int:
        # Half-open range keeps the (user_id, start_time) index usable.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM auxlogs
                WHERE user_id=%s AND aux_type=%s AND start_time >= %s AND start_time < %s
                """,
                (int(user_id), aux_type.value, day, day + timedelta(days=1)),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def start(
        self,
        *,
        user_id: int,
        aux_type: AuxType,
        start_time: datetime,
        close: Optional[AuxClosure] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if close is not None:
                    cur.execute(_CLOSE_SQL, _close_params(close))
                cur.execute(
                    "INSERT INTO auxlogs(user_id, aux_type, start_time) VALUES(%s,%s,%s)",
                    (int(user_id), aux_type.value, start_time),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_auxlogs_one_open: a concurrent start left another interval open.
            if is_duplicate_key(e):
                return 0
            raise

    def close(self, closure: AuxClosure) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_CLOSE_SQL, _close_params(closure))
            return cur.rowcount > 0

    def get_history_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AuxLog]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start is not None:
            clauses.append("start_time >= %s")
            params.append(start)
        if end is not None:
            clauses.append("start_time <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM auxlogs
                WHERE {where}
                ORDER BY start_time DESC
                """,
                tuple(params),
            )
            return [_to_aux(r) for r in fetchall(cur)]
