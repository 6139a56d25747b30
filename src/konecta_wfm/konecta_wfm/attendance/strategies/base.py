from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...schedules.model import Schedule


@dataclass(frozen=True)
class TimingDecision:
    is_late: bool = False
    is_early_logout: bool = False
    overtime_seconds: int = 0


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we derive timing flags for a session."""

    @abstractmethod
    def decide_clock_in(self, *, now: datetime, schedule: Optional[Schedule]) -> TimingDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_clock_out(
        self,
        *,
        now: datetime,
        clock_in: datetime,
        worked_seconds: int,
        schedule: Optional[Schedule],
    ) -> TimingDecision:
        raise NotImplementedError
