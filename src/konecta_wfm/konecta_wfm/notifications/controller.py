from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import as_json
from ..common.web import as_flag, current_user_id, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="notifications")
    @login_required
    def notifications():
        unread_only = as_flag(request.args.get("unread_only", ""))
        items = container.notification_service.list_for_user(current_user_id(), unread_only=unread_only)
        return jsonify(as_json(list(items)))

    @app.route("/api/notifications/<int:notification_id>/read", methods=["POST"], endpoint="read_notification")
    @login_required
    def read_notification(notification_id: int):
        container.notification_service.mark_read(notification_id=notification_id, user_id=current_user_id())
        return jsonify({"message": "Marked as read"})

    @app.route("/api/notifications/read-all", methods=["POST"], endpoint="read_all_notifications")
    @login_required
    def read_all_notifications():
        updated = container.notification_service.mark_all_read(current_user_id())
        return jsonify({"message": "All marked as read", "updated": updated})
