from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Schedule:
    """Expected shift window for one user on one day (UTC)."""

    schedule_id: int
    user_id: int
    work_date: date
    shift_start: Optional[datetime]
    shift_end: Optional[datetime]
    day_type: str = "work"
