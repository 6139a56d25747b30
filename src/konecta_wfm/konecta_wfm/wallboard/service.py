from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import now_utc, to_naive_utc
from ..core.constants import ON_BREAK_AUX_TYPES
from ..core.enums import AgentLiveStatus, Role
from ..core.exceptions import AuthorizationError
from .model import AgentLiveView, LiveRow, Wallboard
from .repository import WallboardRepository


def live_status(row: LiveRow) -> AgentLiveStatus:
    if not row.clock_in:
        return AgentLiveStatus.OFF
    if row.clock_out:
        return AgentLiveStatus.CLOCKED_OUT
    if row.current_aux:
        return AgentLiveStatus.AUX
    return AgentLiveStatus.AVAILABLE


def summarize(rows: Iterable[LiveRow], *, day: date, now: datetime) -> Wallboard:
    """Aggregate live rows into wallboard counters.

    An agent is running overtime while clocked in past today's scheduled end.
    """

    agents = []
    online = on_break = late = overtime = 0
    for row in rows:
        is_open = bool(row.clock_in) and not row.clock_out
        if is_open:
            online += 1
            if row.shift_end is not None and now > row.shift_end:
                overtime += 1
        if row.current_aux in ON_BREAK_AUX_TYPES:
            on_break += 1
        if row.is_late:
            late += 1

        agents.append(
            AgentLiveView(
                user_id=row.user_id,
                full_name=row.full_name,
                status=live_status(row),
                current_aux=row.current_aux,
                is_late=row.is_late,
                clock_in=row.clock_in,
                clock_out=row.clock_out,
            )
        )

    return Wallboard(
        date=day,
        agents_online=online,
        agents_on_break=on_break,
        late_today=late,
        overtime_running=overtime,
        agents=agents,
    )


class WallboardService:
    def __init__(self, wallboard: WallboardRepository):
        self._wallboard = wallboard

    def build(
        self,
        *,
        current_role: Role,
        user_id: int,
        day: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Wallboard:
        if current_role not in {Role.MANAGER, Role.ADMIN}:
            raise AuthorizationError("Only managers and admins can view the wallboard")

        now = to_naive_utc(now) if now else now_utc()
        day = day or now.date()
        manager_id = None if current_role == Role.ADMIN else int(user_id)

        rows = self._wallboard.list_live_rows(day=day, manager_id=manager_id)
        return summarize(rows, day=day, now=now)
