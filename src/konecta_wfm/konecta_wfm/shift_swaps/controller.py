from __future__ import annotations

from flask import Flask, jsonify

from ..common.serializers import as_json
from ..common.web import (
    as_flag,
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
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shift-swaps/me", methods=["GET"], endpoint="my_swaps")
    @login_required
    def my_swaps():
        return jsonify(as_json(list(container.shift_swap_service.list_for_user(current_user_id()))))

    @app.route("/api/shift-swaps", methods=["POST"], endpoint="propose_swap")
    @roles_required(Role.AGENT)
    def propose_swap():
        data = json_body()
        require_field(data, "target_id", "date")
        try:
            target_id = int(data["target_id"])
        except (TypeError, ValueError):
            raise ValidationError("target_id must be a user id")

        swap = container.shift_swap_service.propose(
            current_role=current_role(),
            requester_id=current_user_id(),
            target_id=target_id,
            swap_date=parse_date_field(data["date"], "date"),
            reason=data.get("reason"),
        )
        return jsonify(as_json(swap)), 201

    @app.route("/api/shift-swaps/<int:swap_id>/respond", methods=["POST"], endpoint="respond_swap")
    @roles_required(Role.AGENT)
    def respond_swap(swap_id: int):
        accept = as_flag(json_body().get("accept"))
        swap = container.shift_swap_service.respond_as_target(
            swap_id=swap_id,
            target_id=current_user_id(),
            accept=accept,
        )
        return jsonify(as_json(swap))

    @app.route("/api/shift-swaps/manager/pending", methods=["GET"], endpoint="pending_swaps")
    @roles_required(Role.MANAGER)
    def pending_swaps():
        return jsonify(as_json(list(container.shift_swap_service.list_pending_for_manager(current_user_id()))))

    @app.route("/api/shift-swaps/<int:swap_id>/manager-approve", methods=["POST"], endpoint="decide_swap")
    @roles_required(Role.MANAGER)
    def decide_swap(swap_id: int):
        approve = as_flag(json_body().get("approve"))
        swap = container.shift_swap_service.decide_as_manager(
            swap_id=swap_id,
            manager_id=current_user_id(),
            approve=approve,
        )
        return jsonify(as_json(swap))
