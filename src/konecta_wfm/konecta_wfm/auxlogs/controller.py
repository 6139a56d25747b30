from __future__ import annotations

from flask import Flask, jsonify

from ..common.serializers import as_json
from ..common.web import current_user_id, json_body, range_args, require_field, roles_required
from ..container import Container
from ..core.enums import Role

_STAFF = (Role.AGENT, Role.MANAGER, Role.ADMIN)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/aux/start", methods=["POST"], endpoint="aux_start")
    @roles_required(*_STAFF)
    def aux_start():
        data = json_body()
        require_field(data, "aux_type")
        aux = container.aux_service.start_aux(current_user_id(), data["aux_type"])
        return jsonify(as_json(aux)), 201

    @app.route("/api/aux/end", methods=["POST"], endpoint="aux_end")
    @roles_required(*_STAFF)
    def aux_end():
        aux = container.aux_service.end_aux(current_user_id())
        return jsonify(as_json(aux))

    @app.route("/api/aux/current", methods=["GET"], endpoint="current_aux")
    @roles_required(*_STAFF)
    def current_aux():
        aux = container.aux_service.get_current(current_user_id())
        return jsonify(as_json(aux))

    @app.route("/api/aux/me", methods=["GET"], endpoint="my_aux")
    @roles_required(*_STAFF)
    def my_aux():
        start, end = range_args()
        history = container.aux_service.get_history(current_user_id(), start=start, end=end)
        return jsonify(as_json(list(history)))
