from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    start_time: Optional[time]
    end_time: Optional[time]
    reason: Optional[str]
    file_url: Optional[str]
    status: LeaveStatus
    created_at: datetime
    approved_by: Optional[int] = None
    decided_at: Optional[datetime] = None
