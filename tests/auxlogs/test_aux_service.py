from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.konecta_wfm.konecta_wfm.auxlogs.model import AuxClosure, AuxLimits, AuxLog
from src.konecta_wfm.konecta_wfm.auxlogs.service import AuxService
from src.konecta_wfm.konecta_wfm.core.enums import AuxType
from src.konecta_wfm.konecta_wfm.core.exceptions import (
    AlreadyOpenError,
    DailyLimitExceededError,
    NoOpenSessionError,
    ValidationError,
)


class InMemoryAuxLogs:
    def __init__(self):
        self._rows: dict[int, AuxLog] = {}
        self._id = 0

    def get_by_id(self, aux_id: int) -> Optional[AuxLog]:
        return self._rows.get(aux_id)

    def get_open_for_user(self, user_id: int) -> Optional[AuxLog]:
        for row in self._rows.values():
            if row.user_id == user_id and row.is_open:
                return row
        return None

    def count_started_on(self, *, user_id: int, aux_type: AuxType, day: date) -> int:
        return sum(
            1
            for r in self._rows.values()
            if r.user_id == user_id and r.aux_type == aux_type and r.start_time.date() == day
        )

    def start(self, *, user_id: int, aux_type: AuxType, start_time: datetime, close: Optional[AuxClosure] = None) -> int:
        if close:
            self.close(close)
        if self.get_open_for_user(user_id):
            return 0
        self._id += 1
        self._rows[self._id] = AuxLog(
            aux_id=self._id,
            user_id=user_id,
            aux_type=aux_type,
            start_time=start_time,
            end_time=None,
        )
        return self._id

    def close(self, closure: AuxClosure) -> bool:
        row = self._rows.get(closure.aux_id)
        if not row or not row.is_open:
            return False
        self._rows[closure.aux_id] = replace(
            row,
            end_time=closure.end_time,
            duration_seconds=closure.duration_seconds,
            over_limit=closure.over_limit,
        )
        return True

    def get_history_for_user(self, user_id: int, *, start=None, end=None):
        items = [r for r in self._rows.values() if r.user_id == user_id]
        if start:
            items = [r for r in items if r.start_time >= start]
        if end:
            items = [r for r in items if r.start_time <= end]
        return sorted(items, key=lambda r: r.start_time, reverse=True)


NOON = datetime(2024, 5, 1, 12, 0, 0)


def test_lunch_over_sixty_minutes_is_over_limit():
    svc = AuxService(InMemoryAuxLogs())

    svc.start_aux(1, "lunch", now=NOON)
    closed = svc.end_aux(1, now=datetime(2024, 5, 1, 13, 10, 0))

    assert closed.aux_type == AuxType.LUNCH
    assert closed.duration_seconds == 4200
    assert closed.over_limit is True


def test_break_at_exact_limit_is_not_over():
    svc = AuxService(InMemoryAuxLogs())

    svc.start_aux(1, AuxType.BREAK, now=NOON)
    closed = svc.end_aux(1, now=NOON + timedelta(minutes=15))

    assert closed.duration_seconds == 900
    assert closed.over_limit is False


def test_switching_type_auto_closes_previous_interval():
    repo = InMemoryAuxLogs()
    svc = AuxService(repo)

    first = svc.start_aux(1, "break", now=NOON)
    second = svc.start_aux(1, "meeting", now=NOON + timedelta(minutes=20))

    previous = repo.get_by_id(first.aux_id)
    assert previous.end_time == NOON + timedelta(minutes=20)
    assert previous.duration_seconds == 1200
    assert previous.over_limit is True
    assert second.is_open
    assert svc.get_current(1).aux_id == second.aux_id


def test_once_per_day_type_cannot_start_twice():
    svc = AuxService(InMemoryAuxLogs())
    svc.start_aux(1, "last_break", now=NOON)
    svc.end_aux(1, now=NOON + timedelta(minutes=5))

    with pytest.raises(DailyLimitExceededError) as exc:
        svc.start_aux(1, "last_break", now=NOON + timedelta(hours=2))

    assert "last break" in str(exc.value)


def test_daily_limit_resets_next_day():
    svc = AuxService(InMemoryAuxLogs())
    svc.start_aux(1, "break", now=NOON)
    svc.end_aux(1, now=NOON + timedelta(minutes=5))

    started = svc.start_aux(1, "break", now=NOON + timedelta(days=1))

    assert started.is_open


def test_break_across_midnight_counts_on_its_start_day():
    svc = AuxService(InMemoryAuxLogs())
    late = datetime(2024, 5, 1, 23, 55, 0)
    svc.start_aux(1, "break", now=late)
    svc.end_aux(1, now=late + timedelta(minutes=10))

    started = svc.start_aux(1, "break", now=datetime(2024, 5, 2, 1, 0, 0))

    assert started.start_time.date() == date(2024, 5, 2)


def test_unlimited_types_can_repeat_and_are_never_over_limit():
    svc = AuxService(InMemoryAuxLogs())
    svc.start_aux(1, "coaching", now=NOON)
    svc.start_aux(1, "training", now=NOON + timedelta(hours=3))
    svc.start_aux(1, "coaching", now=NOON + timedelta(hours=4))
    closed = svc.end_aux(1, now=NOON + timedelta(hours=9))

    assert closed.duration_seconds == 5 * 3600
    assert closed.over_limit is False
    assert all(not h.over_limit for h in svc.get_history(1))


def test_end_without_open_interval():
    svc = AuxService(InMemoryAuxLogs())

    with pytest.raises(NoOpenSessionError):
        svc.end_aux(1, now=NOON)


def test_unknown_aux_type_is_rejected():
    svc = AuxService(InMemoryAuxLogs())

    with pytest.raises(ValidationError):
        svc.start_aux(1, "nap", now=NOON)


def test_custom_limits_are_applied():
    svc = AuxService(InMemoryAuxLogs(), limits=AuxLimits(break_limit_minutes=10, lunch_limit_minutes=30))

    svc.start_aux(1, "lunch", now=NOON)
    closed = svc.end_aux(1, now=NOON + timedelta(minutes=31))

    assert svc.limits.lunch_limit_minutes == 30
    assert closed.over_limit is True


def test_start_lost_race_is_already_open():
    repo = InMemoryAuxLogs()
    svc = AuxService(repo)
    repo.start = lambda **kwargs: 0

    with pytest.raises(AlreadyOpenError):
        svc.start_aux(1, "meeting", now=NOON)


def test_history_newest_first():
    svc = AuxService(InMemoryAuxLogs())
    svc.start_aux(1, "meeting", now=NOON)
    svc.start_aux(1, "lunch", now=NOON + timedelta(hours=1))
    svc.end_aux(1, now=NOON + timedelta(hours=2))

    history = svc.get_history(1, start=NOON, end=NOON + timedelta(hours=1))

    assert [h.aux_type for h in history] == [AuxType.LUNCH, AuxType.MEETING]
