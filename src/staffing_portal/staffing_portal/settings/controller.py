from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_role, current_user_id, error_response, login_required, roles_required
from ..core.enums import ADMIN_PANEL_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/settings", methods=["GET"], endpoint="get_settings")
    @login_required
    def get_settings():
        try:
            settings = container.settings_service.get_for(current_role=current_role())
            return jsonify({"success": True, "data": settings.to_dict()})
        except Exception as e:
            return error_response(e, "Failed to fetch settings")

    @app.route("/api/admin/settings", methods=["PUT"], endpoint="update_settings")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def update_settings():
        body = request.get_json(silent=True) or {}
        try:
            settings = container.settings_service.update(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                check_in_start_hour=body.get("checkInStartHour"),
                check_in_end_hour=body.get("checkInEndHour"),
                check_out_start_hour=body.get("checkOutStartHour"),
            )
            return jsonify({"success": True, "data": settings.to_dict(), "message": "Settings updated successfully"})
        except Exception as e:
            return error_response(e, "Failed to update settings")
