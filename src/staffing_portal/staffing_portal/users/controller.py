from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_role, error_response, roles_required
from ..core.enums import ADMIN_PANEL_ROLES, Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def admin_users():
        try:
            users = container.user_service.list_users(current_role=current_role(), role=request.args.get("role"))
            return jsonify({"success": True, "data": [u.to_dict() for u in users]})
        except Exception as e:
            return error_response(e, "Failed to fetch users")

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @roles_required({Role.ADMIN}, "Unauthorized")
    def add_user():
        body = request.get_json(silent=True) or {}
        try:
            user = container.user_service.create_account(
                current_role=current_role(),
                full_name=body.get("fullName"),
                email=body.get("email"),
                password=body.get("password"),
                role=body.get("role", Role.EMPLOYEE.value),
            )
            return jsonify({"success": True, "data": user.to_dict()}), 201
        except Exception as e:
            return error_response(e, "Failed to create user")

    @app.route("/api/admin/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @roles_required({Role.ADMIN}, "Unauthorized")
    def update_user(user_id: int):
        try:
            user = container.user_service.update_user(
                current_role=current_role(),
                user_id=user_id,
                changes=request.get_json(silent=True) or {},
            )
            return jsonify({"success": True, "data": user.to_dict()})
        except Exception as e:
            return error_response(e, "Failed to update user")
