from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import elapsed_seconds
from ...schedules.model import Schedule
from .base import AttendanceStrategy, TimingDecision


class OvertimeStrategy(AttendanceStrategy):
    """Clock-out at or after the scheduled shift end.

    scheduled = shift_end - shift_start (shift_end - clock_in when the shift has
    no start), floored at 0; overtime = worked - scheduled, floored at 0.
    """

    def decide_clock_in(self, *, now: datetime, schedule: Optional[Schedule]) -> TimingDecision:
        return TimingDecision()

    def decide_clock_out(
        self,
        *,
        now: datetime,
        clock_in: datetime,
        worked_seconds: int,
        schedule: Optional[Schedule],
    ) -> TimingDecision:
        if not schedule or not schedule.shift_end:
            return TimingDecision()

        scheduled_seconds = elapsed_seconds(schedule.shift_start or clock_in, schedule.shift_end)
        return TimingDecision(overtime_seconds=max(0, worked_seconds - scheduled_seconds))
