from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import elapsed_seconds, now_utc, to_naive_utc
from ..common.validators import parse_enum
from ..core.constants import ONCE_PER_DAY_AUX_TYPES
from ..core.enums import AuxType
from ..core.exceptions import AlreadyOpenError, DailyLimitExceededError, NoOpenSessionError, ValidationError
from .model import AuxClosure, AuxLimits, AuxLog
from .repository import AuxLogRepository

logger = logging.getLogger(__name__)


class AuxService:
    """AUX status tracking: one open interval per user, auto-closed on switch."""

    def __init__(self, auxlogs: AuxLogRepository, *, limits: AuxLimits | None = None):
        self._auxlogs = auxlogs
        self._limits = limits or AuxLimits()

    @property
    def limits(self) -> AuxLimits:
        return self._limits

    def _closure_for(self, open_aux: AuxLog, now: datetime) -> AuxClosure:
        seconds = elapsed_seconds(open_aux.start_time, now)
        limit = self._limits.limit_seconds_for(open_aux.aux_type)
        return AuxClosure(
            aux_id=open_aux.aux_id,
            end_time=now,
            duration_seconds=seconds,
            over_limit=limit is not None and seconds > limit,
        )

    def start_aux(self, user_id: int, aux_type: AuxType | str, *, now: datetime | None = None) -> AuxLog:
        now = to_naive_utc(now) if now else now_utc()
        aux_type = parse_enum(AuxType, aux_type, "aux_type")

        if aux_type in ONCE_PER_DAY_AUX_TYPES:
            used = self._auxlogs.count_started_on(user_id=user_id, aux_type=aux_type, day=now.date())
            if used >= 1:
                label = aux_type.value.replace("_", " ")
                raise DailyLimitExceededError(f"You can only take one {label} per day.")

        open_aux = self._auxlogs.get_open_for_user(user_id)
        closure = self._closure_for(open_aux, now) if open_aux else None

        aux_id = self._auxlogs.start(user_id=user_id, aux_type=aux_type, start_time=now, close=closure)
        if aux_id <= 0:
            raise AlreadyOpenError("Another AUX status was started at the same time. Try again.")

        if closure:
            logger.info(
                "User %s auto-closed %s after %ss (over_limit=%s)",
                user_id,
                open_aux.aux_type.value,
                closure.duration_seconds,
                closure.over_limit,
            )
        logger.info("User %s started AUX %s", user_id, aux_type.value)
        return self._auxlogs.get_by_id(aux_id)

    def end_aux(self, user_id: int, *, now: datetime | None = None) -> AuxLog:
        now = to_naive_utc(now) if now else now_utc()

        open_aux = self._auxlogs.get_open_for_user(user_id)
        if not open_aux:
            raise NoOpenSessionError("No active AUX status.")

        closure = self._closure_for(open_aux, now)
        if not self._auxlogs.close(closure):
            raise NoOpenSessionError("No active AUX status.")

        logger.info(
            "User %s ended %s after %ss (over_limit=%s)",
            user_id,
            open_aux.aux_type.value,
            closure.duration_seconds,
            closure.over_limit,
        )
        return self._auxlogs.get_by_id(open_aux.aux_id)

    def get_current(self, user_id: int) -> Optional[AuxLog]:
        return self._auxlogs.get_open_for_user(user_id)

    def get_history(
        self,
        user_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AuxLog]:
        if start and end and end < start:
            raise ValidationError("'to' must not be before 'from'")
        return self._auxlogs.get_history_for_user(user_id, start=start, end=end)
