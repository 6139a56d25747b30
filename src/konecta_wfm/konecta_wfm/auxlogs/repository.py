from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AuxType
from .model import AuxClosure, AuxLog


class AuxLogRepository(Protocol):
    def get_by_id(self, aux_id: int) -> Optional[AuxLog]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AuxLog]:
        raise NotImplementedError

    def count_started_on(self, *, user_id: int, aux_type: AuxType, day: date) -> int:
        """How many intervals of this type the user started on `day` (by start_time date)."""

        raise NotImplementedError

    def start(
        self,
        *,
        user_id: int,
        aux_type: AuxType,
        start_time: datetime,
        close: Optional[AuxClosure] = None,
    ) -> int:
        """Close `close` (if given) and open a new interval in one transaction.

        Returns the new aux_id, or 0 when another open interval already exists.
        """

        raise NotImplementedError

    def close(self, closure: AuxClosure) -> bool:
        """Close the interval only if it is still open."""

        raise NotImplementedError

    def get_history_for_user(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AuxLog]:
        """Newest first by start_time; bounds are inclusive."""

        raise NotImplementedError
