from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = (
    "lr.request_id, lr.user_id, lr.leave_type, lr.start_date, lr.end_date, lr.start_time, lr.end_time, "
    "lr.reason, lr.file_url, lr.status, lr.created_at, lr.approved_by, lr.decided_at"
)


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        reason=r.get("reason"),
        file_url=r.get("file_url"),
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        approved_by=r.get("approved_by"),
        decided_at=r.get("decided_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        start_time: Optional[time],
        end_time: Optional[time],
        reason: Optional[str],
        file_url: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    user_id, leave_type, start_date, end_date, start_time, end_time, reason, file_url, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    start_time,
                    end_time,
                    reason,
                    file_url,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests lr WHERE lr.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_user(self, *, user_id: int, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests lr
                WHERE lr.user_id=%s
                ORDER BY lr.created_at DESC, lr.request_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_pending_for_manager(self, *, manager_id: int, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests lr
                JOIN users u ON u.user_id = lr.user_id
                WHERE u.manager_id=%s AND lr.status=%s
                ORDER BY lr.created_at DESC, lr.request_id DESC
                LIMIT %s
                """,
                (int(manager_id), LeaveStatus.PENDING.value, int(limit)),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide_for_manager(self, *, request_id: int, manager_id: int, status: LeaveStatus) -> bool:
        # Single statement: the manager relation and pending state are checked
        # in the same row update that applies the decision.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests lr
                JOIN users u ON u.user_id = lr.user_id
                SET lr.status=%s, lr.approved_by=%s, lr.decided_at=UTC_TIMESTAMP()
                WHERE lr.request_id=%s AND u.manager_id=%s AND lr.status=%s
                """,
                (status.value, int(manager_id), int(request_id), int(manager_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def cancel_for_requester(self, *, request_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_at=UTC_TIMESTAMP()
                WHERE request_id=%s AND user_id=%s AND status=%s
                """,
                (LeaveStatus.CANCELLED.value, int(request_id), int(user_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
