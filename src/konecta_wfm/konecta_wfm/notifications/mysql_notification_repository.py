from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Notification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, message: str, type: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notifications(user_id, message, type) VALUES(%s,%s,%s)",
                (int(user_id), message, type),
            )
            return int(cur.lastrowid)

    def list_for_user(self, *, user_id: int, unread_only: bool = False, limit: int = 100) -> Sequence[Notification]:
        unread = "AND read_status=0" if unread_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT notification_id, user_id, message, type, read_status, created_at
                FROM notifications
                WHERE user_id=%s {unread}
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [
                Notification(
                    notification_id=int(r["notification_id"]),
                    user_id=int(r["user_id"]),
                    message=r["message"],
                    type=r.get("type"),
                    read_status=bool(r["read_status"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET read_status=1 WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when the row was already read.
            cur.execute(
                "SELECT 1 AS found FROM notifications WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            return cur.fetchone() is not None

    def mark_all_read(self, *, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET read_status=1 WHERE user_id=%s AND read_status=0", (int(user_id),))
            return int(cur.rowcount)
