from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_role, current_user_id, error_response, login_required, roles_required
from ..core.enums import ADMIN_PANEL_ROLES, Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employee/announcements", methods=["GET"], endpoint="announcement_feed")
    @login_required
    def announcement_feed():
        try:
            data = container.announcement_service.feed(
                current_role=current_role(),
                category=request.args.get("category"),
                page=request.args.get("page", 1),
                limit=request.args.get("limit", 10),
            )
            return jsonify({"success": True, **data})
        except Exception as e:
            return error_response(e, "Failed to fetch announcements")

    @app.route("/api/admin/announcements", methods=["GET"], endpoint="admin_announcements")
    @roles_required(ADMIN_PANEL_ROLES, "Admin access required")
    def admin_announcements():
        try:
            data = container.announcement_service.list_admin(
                current_role=current_role(),
                is_active=request.args.get("isActive"),
                page=request.args.get("page", 1),
                limit=request.args.get("limit", 50),
            )
            return jsonify({"success": True, **data})
        except Exception as e:
            return error_response(e, "Failed to fetch announcements")

    @app.route("/api/admin/announcements", methods=["POST"], endpoint="create_announcement")
    @roles_required(ADMIN_PANEL_ROLES, "Admin access required")
    def create_announcement():
        body = request.get_json(silent=True) or {}
        try:
            announcement = container.announcement_service.create(
                current_role=current_role(),
                actor_id=current_user_id(),
                title=body.get("title"),
                content=body.get("content"),
                priority=body.get("priority"),
                category=body.get("category"),
                target_roles=body.get("targetRoles"),
                expires_at=body.get("expiresAt"),
            )
            return jsonify(
                {
                    "success": True,
                    "message": "Announcement created successfully",
                    "announcement": announcement.to_dict(container.announcement_service.now()),
                }
            ), 201
        except Exception as e:
            return error_response(e, "Failed to create announcement")

    @app.route("/api/admin/announcements/<int:announcement_id>", methods=["PUT"], endpoint="update_announcement")
    @roles_required({Role.ADMIN}, "Admin access required")
    def update_announcement(announcement_id: int):
        try:
            announcement = container.announcement_service.update(
                current_role=current_role(),
                announcement_id=announcement_id,
                changes=request.get_json(silent=True) or {},
            )
            return jsonify(
                {
                    "success": True,
                    "message": "Announcement updated successfully",
                    "announcement": announcement.to_dict(container.announcement_service.now()),
                }
            )
        except Exception as e:
            return error_response(e, "Failed to update announcement")

    @app.route("/api/admin/announcements/<int:announcement_id>", methods=["DELETE"], endpoint="delete_announcement")
    @roles_required({Role.ADMIN}, "Admin access required")
    def delete_announcement(announcement_id: int):
        try:
            container.announcement_service.delete(current_role=current_role(), announcement_id=announcement_id)
            return jsonify({"success": True, "message": "Announcement deleted successfully"})
        except Exception as e:
            return error_response(e, "Failed to delete announcement")
