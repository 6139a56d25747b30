from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_bound, parse_optional_time
from ..common.serializers import as_json
from ..common.web import (
    current_role,
    current_user_id,
    json_body,
    parse_date_field,
    require_field,
    roles_required,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .service import shift_window


def _date_range() -> tuple[date, date]:
    start, end = request.args.get("from"), request.args.get("to")
    if not start or not end:
        raise ValidationError("Query params from and to (YYYY-MM-DD) required")
    return parse_date_field(start, "from"), parse_date_field(end, "to")


def _shift_bounds(work_date: date, start: Any, end: Any) -> tuple[Optional[datetime], Optional[datetime]]:
    """Shift bounds are either HH:MM on the work date or full ISO datetimes."""

    def is_clock(v: Any) -> bool:
        return isinstance(v, str) and len(v.strip()) <= 8

    if is_clock(start) or is_clock(end):
        if not is_clock(start or "") or not is_clock(end or ""):
            raise ValidationError("shift_start and shift_end must use the same format")
        return shift_window(work_date, parse_optional_time(start), parse_optional_time(end))
    return parse_bound(start), parse_bound(end)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules/me", methods=["GET"], endpoint="my_schedule")
    @roles_required(Role.AGENT, Role.MANAGER, Role.ADMIN)
    def my_schedule():
        start, end = _date_range()
        schedules = container.schedule_service.list_for_user(user_id=current_user_id(), start=start, end=end)
        return jsonify(as_json(list(schedules)))

    @app.route("/api/schedules", methods=["PUT"], endpoint="assign_schedule")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def assign_schedule():
        data = json_body()
        require_field(data, "user_id", "work_date")
        work_date = parse_date_field(data["work_date"], "work_date")
        shift_start, shift_end = _shift_bounds(work_date, data.get("shift_start"), data.get("shift_end"))
        try:
            user_id = int(data["user_id"])
        except (TypeError, ValueError):
            raise ValidationError("user_id must be a user id")

        schedule = container.schedule_service.assign(
            current_role=current_role(),
            current_user_id=current_user_id(),
            user_id=user_id,
            work_date=work_date,
            shift_start=shift_start,
            shift_end=shift_end,
            day_type=data.get("day_type"),
        )
        return jsonify(as_json(schedule))

    @app.route("/api/manager/schedule/team", methods=["GET"], endpoint="team_schedule")
    @roles_required(Role.MANAGER)
    def team_schedule():
        start, end = _date_range()
        schedules = container.schedule_service.list_team(
            current_role=current_role(),
            manager_id=current_user_id(),
            start=start,
            end=end,
        )
        return jsonify(as_json(list(schedules)))
