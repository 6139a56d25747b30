from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def get_for_user_and_date(self, *, user_id: int, work_date: date) -> Optional[Schedule]:
        """The only lookup the attendance tracker performs."""

        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: int,
        work_date: date,
        shift_start: Optional[datetime],
        shift_end: Optional[datetime],
        day_type: str,
    ) -> int:
        """Create or update the schedule for (user, day).

        Returns schedule_id.
        """

        raise NotImplementedError

    def list_for_user(self, *, user_id: int, start: date, end: date) -> Sequence[Schedule]:
        raise NotImplementedError

    def list_for_manager(self, *, manager_id: int, start: date, end: date) -> Sequence[Schedule]:
        raise NotImplementedError
