from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...schedules.model import Schedule
from .base import AttendanceStrategy, TimingDecision


class EarlyLogoutStrategy(AttendanceStrategy):
    """Clock-out before the scheduled shift end. No overtime is counted."""

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
        return TimingDecision(is_early_logout=True)
