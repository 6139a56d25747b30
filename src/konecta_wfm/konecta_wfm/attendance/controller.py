from __future__ import annotations

from flask import Flask, jsonify

from ..common.serializers import as_json
from ..common.web import current_role, current_user_id, optional_date_arg, range_args, roles_required
from ..container import Container
from ..core.enums import Role

_STAFF = (Role.AGENT, Role.MANAGER, Role.ADMIN)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @roles_required(*_STAFF)
    def clock_in():
        record = container.attendance_service.clock_in(current_user_id())
        return jsonify(as_json(record)), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @roles_required(*_STAFF)
    def clock_out():
        record = container.attendance_service.clock_out(current_user_id())
        return jsonify(as_json(record))

    @app.route("/api/attendance/current", methods=["GET"], endpoint="current_attendance")
    @roles_required(*_STAFF)
    def current_attendance():
        # null when the caller is not clocked in
        record = container.attendance_service.get_open_session(current_user_id())
        return jsonify(as_json(record))

    @app.route("/api/attendance/me", methods=["GET"], endpoint="my_attendance")
    @roles_required(*_STAFF)
    def my_attendance():
        start, end = range_args()
        history = container.attendance_service.get_history(current_user_id(), start=start, end=end)
        return jsonify(as_json(list(history)))

    @app.route("/api/manager/attendance/team", methods=["GET"], endpoint="team_attendance")
    @roles_required(Role.MANAGER)
    def team_attendance():
        rows = container.attendance_service.list_team_for_day(
            current_role=current_role(),
            manager_id=current_user_id(),
            day=optional_date_arg("date"),
        )
        return jsonify(as_json(list(rows)))
