from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...schedules.model import Schedule
from .base import AttendanceStrategy, TimingDecision


class LateStrategy(AttendanceStrategy):
    """Clock-in after the scheduled shift start."""

    def decide_clock_in(self, *, now: datetime, schedule: Optional[Schedule]) -> TimingDecision:
        return TimingDecision(is_late=True)

    def decide_clock_out(
        self,
        *,
        now: datetime,
        clock_in: datetime,
        worked_seconds: int,
        schedule: Optional[Schedule],
    ) -> TimingDecision:
        return TimingDecision()
