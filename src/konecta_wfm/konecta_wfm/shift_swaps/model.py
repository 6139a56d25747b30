from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ManagerApproval, SwapStatus, TargetResponse


@dataclass(frozen=True)
class ShiftSwap:
    swap_id: int
    requester_id: int
    target_id: int
    swap_date: date
    reason: Optional[str]
    requester_status: TargetResponse
    manager_approval: ManagerApproval
    status: SwapStatus
    created_at: datetime
    updated_at: datetime
