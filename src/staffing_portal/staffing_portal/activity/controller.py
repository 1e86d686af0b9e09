from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_role, error_response, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/activity-logs", methods=["GET"], endpoint="activity_logs")
    @roles_required({Role.ADMIN}, "Unauthorized - Super Admin access required")
    def activity_logs():
        try:
            data = container.activity_service.list_logs(
                current_role=current_role(),
                action=request.args.get("action"),
                entity_type=request.args.get("entityType"),
                user_role=request.args.get("userRole"),
                start_date=request.args.get("startDate"),
                end_date=request.args.get("endDate"),
                page=request.args.get("page", 1),
                limit=request.args.get("limit", 50),
            )
            return jsonify({"success": True, **data})
        except Exception as e:
            return error_response(e, "Failed to fetch activity logs")
