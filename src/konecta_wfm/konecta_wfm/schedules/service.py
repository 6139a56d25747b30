from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.validators import optional_text
from ..core.constants import DEFAULT_DAY_TYPE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .model import Schedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def shift_window(work_date: date, start: Optional[time], end: Optional[time]) -> tuple[Optional[datetime], Optional[datetime]]:
    """Anchor HH:MM times on a work date; an end before the start rolls to the next day."""
    shift_start = datetime.combine(work_date, start) if start else None
    shift_end = datetime.combine(work_date, end) if end else None
    if shift_start and shift_end and shift_end <= shift_start:
        shift_end += timedelta(days=1)
    return shift_start, shift_end


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, users: UserRepository):
        self._schedules = schedules
        self._users = users

    def assign(
        self,
        *,
        current_role: Role,
        current_user_id: int,
        user_id: int,
        work_date: date,
        shift_start: Optional[datetime],
        shift_end: Optional[datetime],
        day_type: Optional[str] = None,
    ) -> Schedule:
        if current_role not in {Role.MANAGER, Role.ADMIN}:
            raise AuthorizationError("You are not allowed to edit schedules")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ValidationError("User not found")
        if current_role == Role.MANAGER and user.manager_id != int(current_user_id):
            raise AuthorizationError("User is not in your team")

        if shift_start and shift_end and shift_end <= shift_start:
            raise ValidationError("Shift end must be after shift start")

        schedule_id = self._schedules.upsert(
            user_id=int(user_id),
            work_date=work_date,
            shift_start=shift_start,
            shift_end=shift_end,
            day_type=optional_text(day_type) or DEFAULT_DAY_TYPE,
        )
        if schedule_id <= 0:
            raise ValidationError("Saving schedule failed")

        logger.info("Schedule set for user %s on %s by %s", user_id, work_date, current_user_id)
        return self._schedules.get_for_user_and_date(user_id=int(user_id), work_date=work_date)

    def list_for_user(self, *, user_id: int, start: date, end: date) -> Sequence[Schedule]:
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return self._schedules.list_for_user(user_id=int(user_id), start=start, end=end)

    def list_team(self, *, current_role: Role, manager_id: int, start: date, end: date) -> Sequence[Schedule]:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers have a team schedule")
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return self._schedules.list_for_manager(manager_id=int(manager_id), start=start, end=end)
