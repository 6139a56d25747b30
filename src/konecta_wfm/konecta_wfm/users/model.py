from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a worker, manager or admin.

    Plain data only; no database access here.
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    manager_id: Optional[int] = None
    is_active: bool = True


@dataclass(frozen=True)
class TeamMember:
    """Read-model for a manager's team listing (no credentials)."""

    user_id: int
    full_name: str
    username: str
    role: Role
    is_active: bool
