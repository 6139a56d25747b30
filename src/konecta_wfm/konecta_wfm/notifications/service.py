from __future__ import annotations

from typing import Sequence

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..core.exceptions import NotFoundError
from .model import Notification
from .repository import NotificationRepository


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify(self, user_id: int, message: str, type: str | None = None) -> int:
        return self._notifications.create(user_id=int(user_id), message=message, type=type)

    def list_for_user(self, user_id: int, *, unread_only: bool = False) -> Sequence[Notification]:
        return self._notifications.list_for_user(
            user_id=int(user_id),
            unread_only=unread_only,
            limit=DEFAULT_NOTIFICATION_LIMIT,
        )

    def mark_read(self, *, notification_id: int, user_id: int) -> None:
        if not self._notifications.mark_read(notification_id=int(notification_id), user_id=int(user_id)):
            raise NotFoundError("Notification not found")

    def mark_all_read(self, user_id: int) -> int:
        return self._notifications.mark_all_read(user_id=int(user_id))
