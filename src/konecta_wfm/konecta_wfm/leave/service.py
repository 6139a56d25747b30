from __future__ import annotations

import logging
from datetime import date, time
from typing import Optional, Sequence

from ..common.validators import optional_text, parse_enum
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import (
    AuthorizationError,
    MissingDocumentError,
    MissingOvertimeWindowError,
    NotFoundError,
    ValidationError,
)
from ..notifications.service import NotificationService
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Agents submit leave, their manager approves or rejects it once."""

    def __init__(self, leaves: LeaveRepository, notifications: NotificationService):
        self._leaves = leaves
        self._notifications = notifications

    def submit(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_type: LeaveType | str,
        start_date: date,
        end_date: date,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        reason: Optional[str] = None,
        file_url: Optional[str] = None,
    ) -> LeaveRequest:
        if current_role != Role.AGENT:
            raise AuthorizationError("Only agents can submit leave requests")

        leave_type = parse_enum(LeaveType, leave_type, "leave_type")
        if end_date < start_date:
            raise ValidationError("end_date must be on or after start_date")

        file_url = optional_text(file_url)
        if leave_type == LeaveType.SICK and not file_url:
            raise MissingDocumentError("Sick leave requires a supporting document")
        if leave_type == LeaveType.OVERTIME and (start_time is None or end_time is None):
            raise MissingOvertimeWindowError("Overtime requests need both start_time and end_time")

        request_id = self._leaves.create(
            user_id=int(user_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            start_time=start_time,
            end_time=end_time,
            reason=optional_text(reason),
            file_url=file_url,
        )
        logger.info("User %s submitted %s leave request %s", user_id, leave_type.value, request_id)
        return self._leaves.get_by_id(request_id)

    def decide(self, *, request_id: int, manager_id: int, approve: bool) -> LeaveRequest:
        status = LeaveStatus.APPROVED if approve else LeaveStatus.REJECTED
        decided = self._leaves.decide_for_manager(
            request_id=int(request_id),
            manager_id=int(manager_id),
            status=status,
        )
        if not decided:
            raise NotFoundError("Leave request not found or already processed")

        leave = self._leaves.get_by_id(int(request_id))
        logger.info("Manager %s set leave request %s to %s", manager_id, request_id, status.value)

        if approve:
            self._notifications.notify(leave.user_id, "Your leave request has been approved.", "leave_approved")
        else:
            self._notifications.notify(leave.user_id, "Your leave request has been rejected.", "leave_rejected")
        return leave

    def cancel(self, *, request_id: int, user_id: int) -> LeaveRequest:
        if not self._leaves.cancel_for_requester(request_id=int(request_id), user_id=int(user_id)):
            raise NotFoundError("Leave request not found or already processed")
        logger.info("User %s cancelled leave request %s", user_id, request_id)
        return self._leaves.get_by_id(int(request_id))

    def list_for_requester(self, user_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_user(user_id=int(user_id), limit=DEFAULT_LIST_LIMIT)

    def list_pending_for_manager(self, manager_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list_pending_for_manager(manager_id=int(manager_id), limit=DEFAULT_LIST_LIMIT)
