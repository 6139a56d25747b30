from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceSession, TeamAttendanceRow


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        user_id: int,
        shift_date: date,
        clock_in: datetime,
        is_late: bool,
    ) -> int:
        """Insert an open session.

        Returns attendance_id, or 0 when the user already has an open session.
        """

        raise NotImplementedError

    def close_session(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        worked_seconds: int,
        is_early_logout: bool,
        overtime_seconds: int,
    ) -> bool:
        """Close the session only if it is still open."""

        raise NotImplementedError

    def get_history_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceSession]:
        """Newest first by clock_in; bounds are inclusive."""

        raise NotImplementedError

    def list_team_for_day(self, *, manager_id: int, day: date) -> Sequence[TeamAttendanceRow]:
        """Every report of the manager, joined with their sessions on `day`."""

        raise NotImplementedError
