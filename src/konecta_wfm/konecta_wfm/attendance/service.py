from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import elapsed_seconds, now_utc, to_naive_utc
from ..core.enums import Role
from ..core.exceptions import AlreadyOpenError, AuthorizationError, NoOpenSessionError, ValidationError
from ..schedules.repository import ScheduleRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceSession, TeamAttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in/clock-out with at most one open session per user.

    Lateness, early logout and overtime are derived from the user's schedule
    for the UTC date of the operation; without a schedule no flags are set.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        schedules: ScheduleRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._schedules = schedules
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _schedule_for(self, user_id: int, now: datetime):
        return self._schedules.get_for_user_and_date(user_id=user_id, work_date=now.date())

    def clock_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceSession:
        now = to_naive_utc(now) if now else now_utc()

        if self._attendance.get_open_for_user(user_id):
            raise AlreadyOpenError("You are already clocked in.")

        schedule = self._schedule_for(user_id, now)
        strategy = self._factory.for_clock_in(now=now, schedule=schedule)
        decision = strategy.decide_clock_in(now=now, schedule=schedule)

        attendance_id = self._attendance.create_clock_in(
            user_id=user_id,
            shift_date=now.date(),
            clock_in=now,
            is_late=decision.is_late,
        )
        if attendance_id <= 0:
            raise AlreadyOpenError("You are already clocked in.")

        logger.info("User %s clocked in at %s (late=%s)", user_id, now.isoformat(), decision.is_late)
        return self._attendance.get_by_id(attendance_id)

    def clock_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceSession:
        now = to_naive_utc(now) if now else now_utc()

        session = self._attendance.get_open_for_user(user_id)
        if not session:
            raise NoOpenSessionError("You are not currently clocked in.")

        worked = elapsed_seconds(session.clock_in, now)
        schedule = self._schedule_for(user_id, now)
        strategy = self._factory.for_clock_out(now=now, schedule=schedule)
        decision = strategy.decide_clock_out(
            now=now,
            clock_in=session.clock_in,
            worked_seconds=worked,
            schedule=schedule,
        )

        closed = self._attendance.close_session(
            attendance_id=session.attendance_id,
            clock_out=now,
            worked_seconds=worked,
            is_early_logout=decision.is_early_logout,
            overtime_seconds=decision.overtime_seconds,
        )
        if not closed:
            raise NoOpenSessionError("You are not currently clocked in.")

        logger.info(
            "User %s clocked out after %ss (early=%s, overtime=%ss)",
            user_id,
            worked,
            decision.is_early_logout,
            decision.overtime_seconds,
        )
        return self._attendance.get_by_id(session.attendance_id)

    def get_open_session(self, user_id: int) -> Optional[AttendanceSession]:
        return self._attendance.get_open_for_user(user_id)

    def get_history(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceSession]:
        if start and end and end < start:
            raise ValidationError("'to' must not be before 'from'")
        return self._attendance.get_history_for_user(user_id, start=start, end=end)

    def list_team_for_day(
        self,
        *,
        current_role: Role,
        manager_id: int,
        day: Optional[date] = None,
    ) -> Sequence[TeamAttendanceRow]:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can view team attendance")
        return self._attendance.list_team_for_day(manager_id=int(manager_id), day=day or now_utc().date())
