from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ShiftSwap


class ShiftSwapRepository(Protocol):
    """Shift swaps move through: target response, then manager approval.

    Both transitions are conditional updates; they return False when the row
    is not in the expected state for the acting user.
    """

    def create(self, *, requester_id: int, target_id: int, swap_date: date, reason: Optional[str]) -> int:
        raise NotImplementedError

    def get_by_id(self, swap_id: int) -> Optional[ShiftSwap]:
        raise NotImplementedError

    def list_for_user(self, *, user_id: int, limit: int = 200) -> Sequence[ShiftSwap]:
        raise NotImplementedError

    def set_target_response(self, *, swap_id: int, target_id: int, accept: bool) -> bool:
        raise NotImplementedError

    def set_manager_approval(self, *, swap_id: int, manager_id: int, approve: bool) -> bool:
        raise NotImplementedError

    def list_pending_for_manager(self, *, manager_id: int, limit: int = 200) -> Sequence[ShiftSwap]:
        raise NotImplementedError
