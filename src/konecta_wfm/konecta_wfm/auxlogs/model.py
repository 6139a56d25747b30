from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_BREAK_LIMIT_MINUTES, DEFAULT_LUNCH_LIMIT_MINUTES
from ..core.enums import AuxType


@dataclass(frozen=True)
class AuxLog:
    """Domain entity: one AUX interval. `end_time is None` means it is open."""

    aux_id: int
    user_id: int
    aux_type: AuxType
    start_time: datetime
    end_time: Optional[datetime]
    duration_seconds: Optional[int] = None
    over_limit: bool = False

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class AuxClosure:
    """Values written when an open interval is closed."""

    aux_id: int
    end_time: datetime
    duration_seconds: int
    over_limit: bool


@dataclass(frozen=True)
class AuxLimits:
    """Per-type ceilings; break and last_break share one, lunch has its own."""

    break_limit_minutes: int = DEFAULT_BREAK_LIMIT_MINUTES
    lunch_limit_minutes: int = DEFAULT_LUNCH_LIMIT_MINUTES

    def limit_seconds_for(self, aux_type: AuxType) -> Optional[int]:
        if aux_type in (AuxType.BREAK, AuxType.LAST_BREAK):
            return int(self.break_limit_minutes) * 60
        if aux_type == AuxType.LUNCH:
            return int(self.lunch_limit_minutes) * 60
        return None
