from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..core.enums import AgentLiveStatus, AuxType


@dataclass(frozen=True)
class LiveRow:
    """One agent's latest attendance on the day, joined with open AUX and schedule."""

    user_id: int
    full_name: str
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    is_late: bool = False
    current_aux: Optional[AuxType] = None
    shift_end: Optional[datetime] = None


@dataclass(frozen=True)
class AgentLiveView:
    user_id: int
    full_name: str
    status: AgentLiveStatus
    current_aux: Optional[AuxType]
    is_late: bool
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]


@dataclass(frozen=True)
class Wallboard:
    date: date
    agents_online: int = 0
    agents_on_break: int = 0
    late_today: int = 0
    overtime_running: int = 0
    agents: List[AgentLiveView] = field(default_factory=list)
