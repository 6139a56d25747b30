from __future__ import annotations

from flask import Flask, jsonify

from ..common.serializers import as_json
from ..common.web import current_role, current_user_id, optional_date_arg, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/wallboard", methods=["GET"], endpoint="wallboard")
    @roles_required(Role.MANAGER, Role.ADMIN)
    def wallboard():
        board = container.wallboard_service.build(
            current_role=current_role(),
            user_id=current_user_id(),
            day=optional_date_arg("date"),
        )
        return jsonify(as_json(board))
