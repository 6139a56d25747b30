from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TeamMember, User
from .repository import UserRepository

_USER_COLUMNS = "user_id, full_name, username, password_hash, role, manager_id, is_active"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        manager_id=row.get("manager_id"),
        is_active=bool(row.get("is_active", True)),
    )


def _to_member(row: dict) -> TeamMember:
    return TeamMember(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        username=row["username"],
        role=Role(row["role"]),
        is_active=bool(row["is_active"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_by_manager(self, manager_id: int) -> Sequence[TeamMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, username, role, is_active
                FROM users
                WHERE manager_id=%s
                ORDER BY full_name
                """,
                (int(manager_id),),
            )
            return [_to_member(r) for r in fetchall(cur)]

    def list_active_agents(self, *, exclude_user_id: int) -> Sequence[TeamMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, username, role, is_active
                FROM users
                WHERE role=%s AND is_active=1 AND user_id<>%s
                ORDER BY full_name
                """,
                (Role.AGENT.value, int(exclude_user_id)),
            )
            return [_to_member(r) for r in fetchall(cur)]
