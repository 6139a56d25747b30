from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TeamMember, User


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_by_manager(self, manager_id: int) -> Sequence[TeamMember]:
        raise NotImplementedError

    def list_active_agents(self, *, exclude_user_id: int) -> Sequence[TeamMember]:
        raise NotImplementedError
