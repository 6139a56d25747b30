from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_optional_time
from ..common.serializers import as_json
from ..common.web import (
    current_role,
    current_user_id,
    json_body,
    login_required,
    parse_date_field,
    require_field,
    roles_required,
)
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave/me", methods=["GET"], endpoint="my_leave")
    @login_required
    def my_leave():
        return jsonify(as_json(list(container.leave_service.list_for_requester(current_user_id()))))

    @app.route("/api/leave", methods=["POST"], endpoint="submit_leave")
    @roles_required(Role.AGENT)
    def submit_leave():
        data = json_body()
        require_field(data, "leave_type", "start_date", "end_date")
        leave = container.leave_service.submit(
            current_role=current_role(),
            user_id=current_user_id(),
            leave_type=data["leave_type"],
            start_date=parse_date_field(data["start_date"], "start_date"),
            end_date=parse_date_field(data["end_date"], "end_date"),
            start_time=parse_optional_time(data.get("start_time")),
            end_time=parse_optional_time(data.get("end_time")),
            reason=data.get("reason"),
            file_url=data.get("file_url"),
        )
        return jsonify(as_json(leave)), 201

    @app.route("/api/leave/<int:request_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    @login_required
    def cancel_leave(request_id: int):
        leave = container.leave_service.cancel(request_id=request_id, user_id=current_user_id())
        return jsonify(as_json(leave))

    @app.route("/api/manager/leave/pending", methods=["GET"], endpoint="pending_leave")
    @roles_required(Role.MANAGER)
    def pending_leave():
        return jsonify(as_json(list(container.leave_service.list_pending_for_manager(current_user_id()))))

    @app.route("/api/manager/leave/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @roles_required(Role.MANAGER)
    def approve_leave(request_id: int):
        leave = container.leave_service.decide(request_id=request_id, manager_id=current_user_id(), approve=True)
        return jsonify(as_json(leave))

    @app.route("/api/manager/leave/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @roles_required(Role.MANAGER)
    def reject_leave(request_id: int):
        leave = container.leave_service.decide(request_id=request_id, manager_id=current_user_id(), approve=False)
        return jsonify(as_json(leave))
