from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_role, current_user_id, error_response, json_error, login_required, query_int, roles_required
from ..core.enums import ADMIN_PANEL_ROLES, ATTENDANCE_ROLES
from ..core.exceptions import ValidationError
from ..container import Container
from .service import MarkRequest

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        try:
            outcome = container.attendance_service.mark(
                current_user_id(),
                MarkRequest.from_payload(request.get_json(silent=True)),
                current_role=current_role(),
            )
        except Exception:
            logger.exception("Error marking attendance")
            return json_error("Failed to mark attendance", 500)
        return jsonify(outcome.to_payload()), outcome.http_status

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_history")
    @roles_required(ATTENDANCE_ROLES, "Only employees can view attendance")
    def attendance_history():
        try:
            data = container.attendance_service.history(
                current_user_id(),
                current_role=current_role(),
                month=query_int("month"),
                year=query_int("year"),
            )
            return jsonify({"success": True, "data": data})
        except Exception as e:
            return error_response(e, "Failed to fetch attendance")

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def admin_attendance():
        try:
            raw_date = request.args.get("date")
            try:
                work_date = parse_iso_date(raw_date) if raw_date else None
            except ValueError:
                raise ValidationError("date must be YYYY-MM-DD")

            rows = container.attendance_service.list_admin(
                current_role=current_role(),
                work_date=work_date,
                user_id=query_int("userId"),
                location_id=query_int("locationId"),
            )
            return jsonify({"success": True, "data": rows})
        except Exception as e:
            return error_response(e, "Failed to fetch attendance records")
