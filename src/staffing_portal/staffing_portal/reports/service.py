from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import ADMIN_PANEL_ROLES, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .calculator.base import WorkedTimeCalculator
from .calculator.checkout_calculator import CompletedDayCalculator

REPORT_FIELDS = [
    "work_date",
    "user_id",
    "full_name",
    "email",
    "check_in",
    "check_out",
    "check_in_location",
    "check_out_location",
    "status",
    "worked_hours",
    "missed_checkout",
    "note",
]


def _hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[WorkedTimeCalculator] = None,
    ):
        self._attendance = attendance
        self._calculator = calculator or CompletedDayCalculator()

    def build_attendance_report(
        self,
        *,
        current_role: Role,
        start: date,
        end: date,
        today: date,
        user_id: Optional[int] = None,
    ) -> ReportData:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Unauthorized")
        if end < start:
            raise ValidationError("End date cannot be before start date")

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, user_id=user_id)

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            rec = r.record
            minutes = self._calculator.worked_minutes(rec)
            missed = rec.is_missed_checkout(today)

            out_rows.append(
                {
                    "work_date": rec.work_date.strftime("%Y-%m-%d"),
                    "user_id": rec.user_id,
                    "full_name": r.full_name,
                    "email": r.email,
                    "check_in": rec.check_in_time.strftime("%H:%M"),
                    "check_out": rec.check_out_time.strftime("%H:%M") if rec.check_out_time else "-",
                    "check_in_location": rec.check_in_location.name,
                    "check_out_location": rec.check_out_location.name if rec.check_out_location else "-",
                    "status": rec.status.value,
                    "worked_hours": _hhmm(minutes),
                    "missed_checkout": "yes" if missed else "no",
                    "note": rec.note or "",
                }
            )

            s = summary_map.get(rec.user_id)
            if not s:
                s = {
                    "user_id": rec.user_id,
                    "full_name": r.full_name,
                    "email": r.email,
                    "total_minutes": 0,
                    "days_present": 0,
                    "missed_checkouts": 0,
                }
                summary_map[rec.user_id] = s
            s["total_minutes"] += minutes
            s["days_present"] += 1
            s["missed_checkouts"] += int(missed)

        summary = []
        for s in summary_map.values():
            s["total_hours"] = _hhmm(int(s["total_minutes"]))
            summary.append(s)

        summary.sort(key=lambda x: x["total_minutes"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
