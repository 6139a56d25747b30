from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one clock-in/clock-out interval.

    `clock_out is None` means the session is still open.
    """

    attendance_id: int
    user_id: int
    shift_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    worked_seconds: Optional[int] = None
    is_late: bool = False
    is_early_logout: bool = False
    overtime_seconds: int = 0

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class TeamAttendanceRow:
    """Manager read-model: one report's session on a day, or an empty row if absent."""

    user_id: int
    full_name: str
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    worked_seconds: Optional[int] = None
    is_late: bool = False
    is_early_logout: bool = False
    overtime_seconds: int = 0
