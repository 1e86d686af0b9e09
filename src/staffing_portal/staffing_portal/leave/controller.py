from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_role, current_user_id, error_response, query_int, roles_required
from ..core.enums import ADMIN_PANEL_ROLES, ATTENDANCE_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employee/leave", methods=["GET"], endpoint="my_leave")
    @roles_required(ATTENDANCE_ROLES, "Access denied")
    def my_leave():
        try:
            data = container.leave_service.list_mine(
                current_role=current_role(),
                user_id=current_user_id(),
                status=request.args.get("status"),
                page=request.args.get("page", 1),
                limit=request.args.get("limit", 20),
            )
            return jsonify({"success": True, **data})
        except Exception as e:
            return error_response(e, "Failed to fetch leave requests")

    @app.route("/api/employee/leave", methods=["POST"], endpoint="request_leave")
    @roles_required(ATTENDANCE_ROLES, "Only employees can request leave")
    def request_leave():
        body = request.get_json(silent=True) or {}
        try:
            leave = container.leave_service.create(
                current_role=current_role(),
                user_id=current_user_id(),
                leave_type=body.get("leaveType"),
                start_date=body.get("startDate"),
                end_date=body.get("endDate"),
                reason=body.get("reason"),
            )
            return jsonify(
                {"success": True, "message": "Leave request submitted successfully", "leaveRequest": leave.to_dict()}
            ), 201
        except Exception as e:
            return error_response(e, "Failed to create leave request")

    @app.route("/api/admin/leave", methods=["GET"], endpoint="admin_leave")
    @roles_required(ADMIN_PANEL_ROLES, "Admin access required")
    def admin_leave():
        try:
            data = container.leave_service.list_admin(
                current_role=current_role(),
                status=request.args.get("status"),
                user_id=query_int("employeeId"),
                page=request.args.get("page", 1),
                limit=request.args.get("limit", 50),
            )
            return jsonify({"success": True, **data})
        except Exception as e:
            return error_response(e, "Failed to fetch leave requests")

    @app.route("/api/admin/leave/<int:request_id>", methods=["PUT"], endpoint="review_leave")
    @roles_required(ADMIN_PANEL_ROLES, "Admin access required")
    def review_leave(request_id: int):
        body = request.get_json(silent=True) or {}
        try:
            leave = container.leave_service.review(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                request_id=request_id,
                status=body.get("status"),
                review_note=body.get("reviewNote"),
            )
            return jsonify(
                {
                    "success": True,
                    "message": f"Leave request {leave.status.value} successfully",
                    "leaveRequest": leave.to_dict(),
                }
            )
        except Exception as e:
            return error_response(e, "Failed to update leave request")

    @app.route("/api/admin/leave/<int:request_id>", methods=["DELETE"], endpoint="delete_leave")
    @roles_required(ADMIN_PANEL_ROLES, "Admin access required")
    def delete_leave(request_id: int):
        try:
            container.leave_service.delete(current_role=current_role(), request_id=request_id)
            return jsonify({"success": True, "message": "Leave request deleted successfully"})
        except Exception as e:
            return error_response(e, "Failed to delete leave request")
