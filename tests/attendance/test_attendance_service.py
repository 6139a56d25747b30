from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.konecta_wfm.konecta_wfm.attendance.model import AttendanceSession, TeamAttendanceRow
from src.konecta_wfm.konecta_wfm.attendance.service import AttendanceService
from src.konecta_wfm.konecta_wfm.core.enums import Role
from src.konecta_wfm.konecta_wfm.core.exceptions import (
    AlreadyOpenError,
    AuthorizationError,
    NoOpenSessionError,
    ValidationError,
)
from src.konecta_wfm.konecta_wfm.schedules.model import Schedule


@dataclass
class InMemorySchedules:
    by_user_date: dict[tuple[int, date], Schedule] = field(default_factory=dict)

    def get_for_user_and_date(self, *, user_id: int, work_date: date) -> Optional[Schedule]:
        return self.by_user_date.get((user_id, work_date))


class InMemoryAttendance:
    def __init__(self):
        self._rows: dict[int, AttendanceSession] = {}
        self._id = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceSession]:
        return self._rows.get(attendance_id)

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        for row in self._rows.values():
            if row.user_id == user_id and row.is_open:
                return row
        return None

    def create_clock_in(self, *, user_id: int, shift_date: date, clock_in: datetime, is_late: bool) -> int:
        if self.get_open_for_user(user_id):
            return 0
        self._id += 1
        self._rows[self._id] = AttendanceSession(
            attendance_id=self._id,
            user_id=user_id,
            shift_date=shift_date,
            clock_in=clock_in,
            clock_out=None,
            is_late=is_late,
        )
        return self._id

    def close_session(self, *, attendance_id, clock_out, worked_seconds, is_early_logout, overtime_seconds) -> bool:
        row = self._rows.get(attendance_id)
        if not row or not row.is_open:
            return False
        self._rows[attendance_id] = replace(
            row,
            clock_out=clock_out,
            worked_seconds=worked_seconds,
            is_early_logout=is_early_logout,
            overtime_seconds=overtime_seconds,
        )
        return True

    def get_history_for_user(self, user_id: int, *, start=None, end=None):
        items = [r for r in self._rows.values() if r.user_id == user_id]
        if start:
            items = [r for r in items if r.clock_in >= start]
        if end:
            items = [r for r in items if r.clock_in <= end]
        return sorted(items, key=lambda r: r.clock_in, reverse=True)


def _nine_to_five(user_id: int, day: date) -> Schedule:
    return Schedule(
        schedule_id=1,
        user_id=user_id,
        work_date=day,
        shift_start=datetime.combine(day, datetime.min.time()) + timedelta(hours=9),
        shift_end=datetime.combine(day, datetime.min.time()) + timedelta(hours=17),
    )


def _service(schedules: Optional[dict] = None):
    attendance = InMemoryAttendance()
    svc = AttendanceService(attendance, InMemorySchedules(schedules or {}))
    return svc, attendance


def test_late_clock_in_then_overtime_clock_out(fixed_now):
    day = fixed_now.date()
    svc, _ = _service({(1, day): _nine_to_five(1, day)})

    opened = svc.clock_in(1, now=fixed_now)
    assert opened.is_open
    assert opened.is_late is True
    assert opened.shift_date == day

    closed = svc.clock_out(1, now=datetime(2024, 5, 1, 18, 5, 0))
    assert closed.clock_out == datetime(2024, 5, 1, 18, 5, 0)
    assert closed.worked_seconds == 8 * 3600 + 55 * 60
    assert closed.overtime_seconds == 55 * 60
    assert closed.is_early_logout is False


def test_on_time_clock_in_is_not_late():
    day = date(2024, 5, 1)
    svc, _ = _service({(1, day): _nine_to_five(1, day)})

    opened = svc.clock_in(1, now=datetime(2024, 5, 1, 9, 0, 0))

    assert opened.is_late is False


def test_clock_out_before_shift_end_is_early_logout(fixed_now):
    day = fixed_now.date()
    svc, _ = _service({(1, day): _nine_to_five(1, day)})
    svc.clock_in(1, now=fixed_now)

    closed = svc.clock_out(1, now=datetime(2024, 5, 1, 16, 0, 0))

    assert closed.is_early_logout is True
    assert closed.overtime_seconds == 0


def test_no_schedule_means_no_flags(fixed_now):
    svc, _ = _service()

    opened = svc.clock_in(1, now=fixed_now)
    closed = svc.clock_out(1, now=fixed_now + timedelta(hours=10))

    assert opened.is_late is False
    assert closed.is_early_logout is False
    assert closed.overtime_seconds == 0
    assert closed.worked_seconds == 10 * 3600


def test_second_clock_in_is_rejected(fixed_now):
    svc, attendance = _service()
    svc.clock_in(1, now=fixed_now)

    with pytest.raises(AlreadyOpenError):
        svc.clock_in(1, now=fixed_now + timedelta(minutes=1))

    assert len(attendance.get_history_for_user(1)) == 1


def test_clock_out_without_open_session(fixed_now):
    svc, _ = _service()

    with pytest.raises(NoOpenSessionError):
        svc.clock_out(1, now=fixed_now)


def test_clock_in_lost_race_is_already_open(fixed_now):
    svc, attendance = _service()
    # Another request opened a session between the check and the insert
    attendance.get_open_for_user = lambda user_id: None
    attendance.create_clock_in = lambda **kwargs: 0

    with pytest.raises(AlreadyOpenError):
        svc.clock_in(1, now=fixed_now)


def test_worked_seconds_never_negative(fixed_now):
    svc, _ = _service()
    svc.clock_in(1, now=fixed_now)

    closed = svc.clock_out(1, now=fixed_now - timedelta(seconds=30))

    assert closed.worked_seconds == 0


def test_history_is_newest_first_with_inclusive_bounds(fixed_now):
    svc, _ = _service()
    for days in range(3):
        t = fixed_now + timedelta(days=days)
        svc.clock_in(1, now=t)
        svc.clock_out(1, now=t + timedelta(hours=8))

    history = svc.get_history(1)
    assert [h.clock_in.day for h in history] == [3, 2, 1]

    bounded = svc.get_history(1, start=fixed_now, end=fixed_now + timedelta(days=1))
    assert [h.clock_in.day for h in bounded] == [2, 1]


def test_history_rejects_inverted_range(fixed_now):
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.get_history(1, start=fixed_now, end=fixed_now - timedelta(days=1))


def test_open_session_lookup(fixed_now):
    svc, _ = _service()
    assert svc.get_open_session(1) is None

    svc.clock_in(1, now=fixed_now)

    assert svc.get_open_session(1).clock_in == fixed_now


class TeamAttendanceRepo:
    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    def list_team_for_day(self, *, manager_id, day):
        self.calls.append((manager_id, day))
        return self.rows


def test_team_attendance_for_manager_day():
    rows = [
        TeamAttendanceRow(user_id=10, full_name="Adam Agent", clock_in=datetime(2024, 5, 1, 9, 10), is_late=True),
        TeamAttendanceRow(user_id=11, full_name="Bea Agent"),
    ]
    repo = TeamAttendanceRepo(rows)
    svc = AttendanceService(repo, InMemorySchedules())

    team = svc.list_team_for_day(current_role=Role.MANAGER, manager_id=1, day=date(2024, 5, 1))
    svc.list_team_for_day(current_role=Role.MANAGER, manager_id=1)

    assert [r.is_late for r in team] == [True, False]
    assert team[1].clock_in is None
    assert repo.calls[0] == (1, date(2024, 5, 1))
    assert isinstance(repo.calls[1][1], date)


@pytest.mark.parametrize("role", [Role.AGENT, Role.ADMIN])
def test_team_attendance_requires_manager(role):
    svc = AttendanceService(TeamAttendanceRepo([]), InMemorySchedules())

    with pytest.raises(AuthorizationError):
        svc.list_team_for_day(current_role=role, manager_id=1)
