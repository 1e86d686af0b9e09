from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_role, error_response, roles_required
from ..core.enums import ADMIN_PANEL_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/locations", methods=["GET"], endpoint="admin_locations")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def admin_locations():
        try:
            locations = container.location_service.list_all(current_role=current_role())
            return jsonify({"success": True, "data": [loc.to_dict() for loc in locations]})
        except Exception as e:
            return error_response(e, "Failed to fetch locations")

    @app.route("/api/admin/locations", methods=["POST"], endpoint="create_location")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def create_location():
        body = request.get_json(silent=True) or {}
        try:
            location = container.location_service.create(
                current_role=current_role(),
                name=body.get("name"),
                address=body.get("address"),
                latitude=body.get("latitude"),
                longitude=body.get("longitude"),
                radius=body.get("radius"),
            )
            return jsonify({"success": True, "data": location.to_dict()}), 201
        except Exception as e:
            return error_response(e, "Failed to create location")

    @app.route("/api/admin/locations/<int:location_id>", methods=["PUT"], endpoint="update_location")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def update_location(location_id: int):
        try:
            location = container.location_service.update(
                current_role=current_role(),
                location_id=location_id,
                changes=request.get_json(silent=True) or {},
            )
            return jsonify({"success": True, "data": location.to_dict()})
        except Exception as e:
            return error_response(e, "Failed to update location")

    @app.route("/api/admin/locations/<int:location_id>", methods=["DELETE"], endpoint="delete_location")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def delete_location(location_id: int):
        try:
            container.location_service.delete(current_role=current_role(), location_id=location_id)
            return jsonify({"success": True, "message": "Location deleted successfully"})
        except Exception as e:
            return error_response(e, "Failed to delete location")
