from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.serializers import as_json
from ..common.web import current_role, current_user_id, json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(str(data.get("username") or ""), str(data.get("password") or ""))

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.full_name
        session["role"] = user.role.value
        session["manager_id"] = user.manager_id

        logger.info("User %s logged in", user.user_id)
        return jsonify(as_json(user))

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "user_id": current_user_id(),
                "full_name": session.get("name"),
                "role": session.get("role"),
                "manager_id": session.get("manager_id"),
            }
        )

    @app.route("/api/manager/team", methods=["GET"], endpoint="manager_team")
    @roles_required(Role.MANAGER)
    def manager_team():
        team = container.user_service.list_team(current_role=current_role(), manager_id=current_user_id())
        return jsonify(as_json(list(team)))

    @app.route("/api/users/agents", methods=["GET"], endpoint="list_agents")
    @roles_required(Role.AGENT, Role.MANAGER, Role.ADMIN)
    def list_agents():
        agents = container.user_service.list_agents(user_id=current_user_id())
        return jsonify(as_json(list(agents)))
