from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ManagerApproval, SwapStatus, TargetResponse
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ShiftSwap
from .repository import ShiftSwapRepository

_COLUMNS = (
    "ss.swap_id, ss.requester_id, ss.target_id, ss.swap_date, ss.reason, "
    "ss.requester_status, ss.manager_approval, ss.status, ss.created_at, ss.updated_at"
)

# A swap belongs to a manager when either party reports to them.
_MANAGED_BY = "EXISTS (SELECT 1 FROM users u WHERE u.user_id IN (ss.requester_id, ss.target_id) AND u.manager_id=%s)"


def _to_swap(r: dict) -> ShiftSwap:
    return ShiftSwap(
        swap_id=int(r["swap_id"]),
        requester_id=int(r["requester_id"]),
        target_id=int(r["target_id"]),
        swap_date=r["swap_date"],
        reason=r.get("reason"),
        requester_status=TargetResponse(r["requester_status"]),
        manager_approval=ManagerApproval(r["manager_approval"]),
        status=SwapStatus(r["status"]),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLShiftSwapRepository(ShiftSwapRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, requester_id: int, target_id: int, swap_date: date, reason: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_swaps(requester_id, target_id, swap_date, reason,
                                        requester_status, manager_approval, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(requester_id),
                    int(target_id),
                    swap_date,
                    reason,
                    TargetResponse.PENDING.value,
                    ManagerApproval.PENDING.value,
                    SwapStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, swap_id: int) -> Optional[ShiftSwap]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_swaps ss WHERE ss.swap_id=%s", (int(swap_id),))
            r = fetchone(cur)
            return _to_swap(r) if r else None

    def list_for_user(self, *, user_id: int, limit: int = 200) -> Sequence[ShiftSwap]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_swaps ss
                WHERE ss.requester_id=%s OR ss.target_id=%s
                ORDER BY ss.created_at DESC, ss.swap_id DESC
                LIMIT %s
                """,
                (int(user_id), int(user_id), int(limit)),
            )
            return [_to_swap(r) for r in fetchall(cur)]

    def set_target_response(self, *, swap_id: int, target_id: int, accept: bool) -> bool:
        if accept:
            response, status = TargetResponse.ACCEPTED, SwapStatus.PENDING
        else:
            response, status = TargetResponse.DECLINED, SwapStatus.CANCELLED
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_swaps
                SET requester_status=%s, status=%s, updated_at=UTC_TIMESTAMP()
                WHERE swap_id=%s AND target_id=%s AND requester_status=%s AND status=%s
                """,
                (
                    response.value,
                    status.value,
                    int(swap_id),
                    int(target_id),
                    TargetResponse.PENDING.value,
                    SwapStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def set_manager_approval(self, *, swap_id: int, manager_id: int, approve: bool) -> bool:
        if approve:
            approval, status = ManagerApproval.APPROVED, SwapStatus.FINALIZED
        else:
            approval, status = ManagerApproval.REJECTED, SwapStatus.CANCELLED
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE shift_swaps ss
                SET ss.manager_approval=%s, ss.status=%s, ss.updated_at=UTC_TIMESTAMP()
                WHERE ss.swap_id=%s
                  AND ss.requester_status=%s
                  AND ss.manager_approval=%s
                  AND ss.status=%s
                  AND {_MANAGED_BY}
                """,
                (
                    approval.value,
                    status.value,
                    int(swap_id),
                    TargetResponse.ACCEPTED.value,
                    ManagerApproval.PENDING.value,
                    SwapStatus.PENDING.value,
                    int(manager_id),
                ),
            )
            return cur.rowcount > 0

    def list_pending_for_manager(self, *, manager_id: int, limit: int = 200) -> Sequence[ShiftSwap]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_swaps ss
                WHERE ss.status=%s
                  AND ss.requester_status=%s
                  AND ss.manager_approval=%s
                  AND {_MANAGED_BY}
                ORDER BY ss.created_at DESC, ss.swap_id DESC
                LIMIT %s
                """,
                (
                    SwapStatus.PENDING.value,
                    TargetResponse.ACCEPTED.value,
                    ManagerApproval.PENDING.value,
                    int(manager_id),
                    int(limit),
                ),
            )
            return [_to_swap(r) for r in fetchall(cur)]
