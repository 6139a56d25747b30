from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..schedules.model import Schedule
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLogoutStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the day's schedule."""

    def for_clock_in(self, *, now: datetime, schedule: Optional[Schedule]) -> AttendanceStrategy:
        if not schedule or not schedule.shift_start:
            return NormalStrategy()

        if now > schedule.shift_start:
            return LateStrategy()
        return NormalStrategy()

    def for_clock_out(self, *, now: datetime, schedule: Optional[Schedule]) -> AttendanceStrategy:
        if not schedule or not schedule.shift_end:
            return NormalStrategy()

        if now < schedule.shift_end:
            return EarlyLogoutStrategy()
        return OvertimeStrategy()
