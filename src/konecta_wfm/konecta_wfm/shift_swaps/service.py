from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import optional_text
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, SelfSwapError, ValidationError
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from .model import ShiftSwap
from .repository import ShiftSwapRepository

logger = logging.getLogger(__name__)


class ShiftSwapService:
    """Two-stage swap: the target accepts or declines, then a manager decides."""

    def __init__(self, swaps: ShiftSwapRepository, users: UserRepository, notifications: NotificationService):
        self._swaps = swaps
        self._users = users
        self._notifications = notifications

    def propose(
        self,
        *,
        current_role: Role,
        requester_id: int,
        target_id: int,
        swap_date: date,
        reason: Optional[str] = None,
    ) -> ShiftSwap:
        if current_role != Role.AGENT:
            raise AuthorizationError("Only agents can propose shift swaps")
        if int(target_id) == int(requester_id):
            raise SelfSwapError("Cannot swap with yourself")

        target = self._users.get_by_id(int(target_id))
        if not target or not target.is_active:
            raise ValidationError("Target agent does not exist")

        swap_id = self._swaps.create(
            requester_id=int(requester_id),
            target_id=int(target_id),
            swap_date=swap_date,
            reason=optional_text(reason),
        )
        logger.info("User %s proposed swap %s with user %s for %s", requester_id, swap_id, target_id, swap_date)
        return self._swaps.get_by_id(swap_id)

    def respond_as_target(self, *, swap_id: int, target_id: int, accept: bool) -> ShiftSwap:
        if not self._swaps.set_target_response(swap_id=int(swap_id), target_id=int(target_id), accept=accept):
            raise NotFoundError("Shift swap not found or already responded")

        swap = self._swaps.get_by_id(int(swap_id))
        logger.info("User %s %s swap %s", target_id, "accepted" if accept else "declined", swap_id)

        if accept:
            self._notifications.notify(
                swap.requester_id,
                f"Your shift swap for {swap.swap_date:%Y-%m-%d} was accepted and awaits manager approval.",
                "shift_swap_accepted",
            )
        else:
            self._notifications.notify(
                swap.requester_id,
                f"Your shift swap for {swap.swap_date:%Y-%m-%d} was declined.",
                "shift_swap_declined",
            )
        return swap

    def decide_as_manager(self, *, swap_id: int, manager_id: int, approve: bool) -> ShiftSwap:
        if not self._swaps.set_manager_approval(swap_id=int(swap_id), manager_id=int(manager_id), approve=approve):
            raise NotFoundError("Not found or not in your team")

        swap = self._swaps.get_by_id(int(swap_id))
        logger.info("Manager %s set swap %s to %s", manager_id, swap_id, swap.status.value)

        verdict = "approved" if approve else "rejected"
        message = f"The shift swap for {swap.swap_date:%Y-%m-%d} was {verdict} by your manager."
        for user_id in (swap.requester_id, swap.target_id):
            self._notifications.notify(user_id, message, f"shift_swap_{verdict}")
        return swap

    def list_for_user(self, user_id: int) -> Sequence[ShiftSwap]:
        return self._swaps.list_for_user(user_id=int(user_id), limit=DEFAULT_LIST_LIMIT)

    def list_pending_for_manager(self, manager_id: int) -> Sequence[ShiftSwap]:
        return self._swaps.list_pending_for_manager(manager_id=int(manager_id), limit=DEFAULT_LIST_LIMIT)
