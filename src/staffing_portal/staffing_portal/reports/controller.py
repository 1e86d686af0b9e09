from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_role, error_response, query_int, roles_required
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import ADMIN_PANEL_ROLES
from ..core.exceptions import ValidationError
from ..container import Container
from .service import REPORT_FIELDS


def register(app: Flask, container: Container) -> None:
    def _report_range():
        today = container.attendance_service.now().date()
        try:
            end = parse_iso_date(request.args["end"]) if request.args.get("end") else today
            start = (
                parse_iso_date(request.args["start"])
                if request.args.get("start")
                else end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
            )
        except ValueError:
            raise ValidationError("Dates must be YYYY-MM-DD")
        return start, end, today

    def _build_report():
        start, end, today = _report_range()
        data = container.report_service.build_attendance_report(
            current_role=current_role(),
            start=start,
            end=end,
            today=today,
            user_id=query_int("userId"),
        )
        return start, end, data

    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/admin/attendance/report", methods=["GET"], endpoint="admin_attendance_report")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def admin_attendance_report():
        try:
            start, end, data = _build_report()
            return jsonify(
                {
                    "success": True,
                    "data": {
                        "start": start.isoformat(),
                        "end": end.isoformat(),
                        "rows": data.rows,
                        "summary": data.summary,
                    },
                }
            )
        except Exception as e:
            return error_response(e, "Failed to build attendance report")

    @app.route("/api/admin/attendance/report.csv", methods=["GET"], endpoint="admin_attendance_report_csv")
    @roles_required(ADMIN_PANEL_ROLES, "Unauthorized")
    def admin_attendance_report_csv():
        try:
            start, end, data = _build_report()
            return _write_report_csv(data=data, filename=f"attendance_{start:%Y%m%d}_{end:%Y%m%d}.csv")
        except Exception as e:
            return error_response(e, "Failed to export attendance report")
