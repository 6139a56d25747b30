from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import TeamMember
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role
    manager_id: Optional[int]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = require_non_empty(username, "Username")
        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            role=user.role,
            manager_id=user.manager_id,
        )


class UserService:
    def __init__(self, users: UserRepository):
        self._users = users

    def list_team(self, *, current_role: Role, manager_id: int) -> Sequence[TeamMember]:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers have a team")
        return self._users.list_by_manager(int(manager_id))

    def list_agents(self, *, user_id: int) -> Sequence[TeamMember]:
        """Active agents other than the caller, e.g. shift-swap targets."""
        return self._users.list_active_agents(exclude_user_id=int(user_id))
