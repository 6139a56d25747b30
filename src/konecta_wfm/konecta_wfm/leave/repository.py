from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_pending_for_manager(self, *, manager_id: int, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide_for_manager(
        self,
        *,
        request_id: int,
        manager_id: int,
        status: LeaveStatus,
    ) -> bool:
        """Set approved/rejected on a pending request whose requester reports to `manager_id`.

        False when no such pending request exists.
        """

        raise NotImplementedError

    def cancel_for_requester(self, *, request_id: int, user_id: int) -> bool:
        raise NotImplementedError
