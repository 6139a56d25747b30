from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.konecta_wfm.konecta_wfm.core.enums import ManagerApproval, Role, SwapStatus, TargetResponse
from src.konecta_wfm.konecta_wfm.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    SelfSwapError,
    ValidationError,
)
from src.konecta_wfm.konecta_wfm.shift_swaps.model import ShiftSwap
from src.konecta_wfm.konecta_wfm.shift_swaps.service import ShiftSwapService
from src.konecta_wfm.konecta_wfm.users.model import User

SWAP_DAY = date(2024, 5, 6)


def _user(user_id: int, manager_id: Optional[int] = None, role: Role = Role.AGENT) -> User:
    return User(
        user_id=user_id,
        full_name=f"User {user_id}",
        username=f"u{user_id}",
        password_hash="x",
        role=role,
        manager_id=manager_id,
    )


USERS = {
    1: _user(1, role=Role.MANAGER),
    2: _user(2, role=Role.MANAGER),
    10: _user(10, manager_id=1),
    11: _user(11, manager_id=1),
    20: _user(20, manager_id=2),
}


class InMemoryUsers:
    def get_by_id(self, user_id: int) -> Optional[User]:
        return USERS.get(user_id)


class FakeSwapRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, ShiftSwap] = {}

    def create(self, *, requester_id, target_id, swap_date, reason):
        sid = self._next_id
        self._next_id += 1
        stamp = datetime(2024, 5, 1, 9, 0, sid)
        self.rows[sid] = ShiftSwap(
            swap_id=sid,
            requester_id=requester_id,
            target_id=target_id,
            swap_date=swap_date,
            reason=reason,
            requester_status=TargetResponse.PENDING,
            manager_approval=ManagerApproval.PENDING,
            status=SwapStatus.PENDING,
            created_at=stamp,
            updated_at=stamp,
        )
        return sid

    def get_by_id(self, swap_id):
        return self.rows.get(int(swap_id))

    def list_for_user(self, *, user_id, limit=200):
        items = [s for s in self.rows.values() if user_id in (s.requester_id, s.target_id)]
        return sorted(items, key=lambda s: s.created_at, reverse=True)[:limit]

    def set_target_response(self, *, swap_id, target_id, accept):
        s = self.rows.get(int(swap_id))
        if not s or s.target_id != target_id or s.requester_status != TargetResponse.PENDING:
            return False
        if accept:
            self.rows[s.swap_id] = replace(s, requester_status=TargetResponse.ACCEPTED)
        else:
            self.rows[s.swap_id] = replace(s, requester_status=TargetResponse.DECLINED, status=SwapStatus.CANCELLED)
        return True

    def _manages(self, manager_id, s):
        return any(USERS[u].manager_id == manager_id for u in (s.requester_id, s.target_id))

    def set_manager_approval(self, *, swap_id, manager_id, approve):
        s = self.rows.get(int(swap_id))
        if (
            not s
            or s.requester_status != TargetResponse.ACCEPTED
            or s.manager_approval != ManagerApproval.PENDING
            or not self._manages(manager_id, s)
        ):
            return False
        if approve:
            self.rows[s.swap_id] = replace(s, manager_approval=ManagerApproval.APPROVED, status=SwapStatus.FINALIZED)
        else:
            self.rows[s.swap_id] = replace(s, manager_approval=ManagerApproval.REJECTED, status=SwapStatus.CANCELLED)
        return True

    def list_pending_for_manager(self, *, manager_id, limit=200):
        items = [
            s
            for s in self.rows.values()
            if s.requester_status == TargetResponse.ACCEPTED
            and s.manager_approval == ManagerApproval.PENDING
            and self._manages(manager_id, s)
        ]
        return sorted(items, key=lambda s: s.created_at, reverse=True)[:limit]


class FakeNotifier:
    def __init__(self):
        self.sent: list[tuple[int, str, str]] = []

    def notify(self, user_id, message, type=None):
        self.sent.append((user_id, message, type))
        return len(self.sent)


def _svc():
    repo = FakeSwapRepo()
    notifier = FakeNotifier()
    return ShiftSwapService(repo, InMemoryUsers(), notifier), repo, notifier


def _propose(svc, requester_id=10, target_id=11):
    return svc.propose(
        current_role=Role.AGENT,
        requester_id=requester_id,
        target_id=target_id,
        swap_date=SWAP_DAY,
        reason="Doctor appointment",
    )


def test_propose_creates_all_pending():
    svc, _, _ = _svc()

    swap = _propose(svc)

    assert swap.requester_status == TargetResponse.PENDING
    assert swap.manager_approval == ManagerApproval.PENDING
    assert swap.status == SwapStatus.PENDING


def test_cannot_swap_with_self():
    svc, repo, _ = _svc()

    with pytest.raises(SelfSwapError):
        _propose(svc, requester_id=10, target_id=10)
    assert repo.rows == {}


def test_unknown_target_is_rejected():
    svc, _, _ = _svc()

    with pytest.raises(ValidationError):
        _propose(svc, target_id=999)


def test_only_agents_propose():
    svc, _, _ = _svc()

    with pytest.raises(AuthorizationError):
        svc.propose(current_role=Role.MANAGER, requester_id=1, target_id=10, swap_date=SWAP_DAY)


def test_full_approval_flow_notifies_everyone():
    svc, _, notifier = _svc()
    swap = _propose(svc)

    accepted = svc.respond_as_target(swap_id=swap.swap_id, target_id=11, accept=True)
    assert accepted.requester_status == TargetResponse.ACCEPTED
    assert accepted.status == SwapStatus.PENDING
    assert [s.swap_id for s in svc.list_pending_for_manager(1)] == [swap.swap_id]

    final = svc.decide_as_manager(swap_id=swap.swap_id, manager_id=1, approve=True)
    assert final.manager_approval == ManagerApproval.APPROVED
    assert final.status == SwapStatus.FINALIZED
    assert svc.list_pending_for_manager(1) == []

    recipients = [n[0] for n in notifier.sent]
    assert recipients == [10, 10, 11]
    assert notifier.sent[-1][2] == "shift_swap_approved"


def test_manager_rejection_cancels_swap():
    svc, _, _ = _svc()
    swap = _propose(svc)
    svc.respond_as_target(swap_id=swap.swap_id, target_id=11, accept=True)

    final = svc.decide_as_manager(swap_id=swap.swap_id, manager_id=1, approve=False)

    assert final.manager_approval == ManagerApproval.REJECTED
    assert final.status == SwapStatus.CANCELLED


def test_decline_is_terminal():
    svc, _, notifier = _svc()
    swap = _propose(svc)

    declined = svc.respond_as_target(swap_id=swap.swap_id, target_id=11, accept=False)

    assert declined.requester_status == TargetResponse.DECLINED
    assert declined.status == SwapStatus.CANCELLED
    assert notifier.sent[0][2] == "shift_swap_declined"
    with pytest.raises(NotFoundError):
        svc.decide_as_manager(swap_id=swap.swap_id, manager_id=1, approve=True)


def test_only_target_responds_and_only_once():
    svc, _, _ = _svc()
    swap = _propose(svc)

    with pytest.raises(NotFoundError):
        svc.respond_as_target(swap_id=swap.swap_id, target_id=10, accept=True)

    svc.respond_as_target(swap_id=swap.swap_id, target_id=11, accept=True)
    with pytest.raises(NotFoundError):
        svc.respond_as_target(swap_id=swap.swap_id, target_id=11, accept=False)


def test_manager_cannot_decide_before_target_accepts():
    svc, _, _ = _svc()
    swap = _propose(svc)

    with pytest.raises(NotFoundError):
        svc.decide_as_manager(swap_id=swap.swap_id, manager_id=1, approve=True)


def test_either_partys_manager_may_decide_but_not_a_stranger():
    svc, _, _ = _svc()
    swap = _propose(svc, requester_id=10, target_id=20)
    svc.respond_as_target(swap_id=swap.swap_id, target_id=20, accept=True)

    assert [s.swap_id for s in svc.list_pending_for_manager(1)] == [swap.swap_id]
    assert [s.swap_id for s in svc.list_pending_for_manager(2)] == [swap.swap_id]
    with pytest.raises(NotFoundError):
        svc.decide_as_manager(swap_id=swap.swap_id, manager_id=3, approve=True)

    final = svc.decide_as_manager(swap_id=swap.swap_id, manager_id=2, approve=True)
    assert final.status == SwapStatus.FINALIZED

    with pytest.raises(NotFoundError):
        svc.decide_as_manager(swap_id=swap.swap_id, manager_id=1, approve=False)


def test_list_for_user_covers_both_roles():
    svc, _, _ = _svc()
    mine = _propose(svc, requester_id=10, target_id=11)
    theirs = _propose(svc, requester_id=11, target_id=10)
    _propose(svc, requester_id=11, target_id=20)

    assert [s.swap_id for s in svc.list_for_user(10)] == [theirs.swap_id, mine.swap_id]
