from dataclasses import replace
from datetime import date, datetime

import pytest

from src.staffing_portal.staffing_portal.attendance.model import AttendanceRecord, LocationSnapshot
from src.staffing_portal.staffing_portal.core.enums import Role
from src.staffing_portal.staffing_portal.core.exceptions import AuthorizationError, ValidationError
from src.staffing_portal.staffing_portal.reports.calculator.checkout_calculator import CompletedDayCalculator

SNAP = LocationSnapshot(location_id=1, name="Head Office", distance=3.0, latitude=0.0, longitude=0.0)


def _seed(attendance_repo, user_id, day, check_in_hour, check_out=None):
    rec = AttendanceRecord(
        attendance_id=None,
        user_id=user_id,
        work_date=day,
        check_in_time=datetime.combine(day, datetime.min.time()).replace(hour=check_in_hour),
        check_in_location=SNAP,
    )
    rec = attendance_repo.create_checkin(rec)
    if check_out is not None:
        hours = (check_out - rec.check_in_time).total_seconds() / 3600
        attendance_repo.update_checkout(
            replace(rec, check_out_time=check_out, check_out_location=SNAP, work_hours=hours)
        )


def test_calculator_ignores_open_days():
    calc = CompletedDayCalculator()
    rec = AttendanceRecord(None, 2, date(2026, 3, 2), datetime(2026, 3, 2, 10), SNAP)
    assert calc.worked_minutes(rec) == 0
    assert calc.worked_minutes(AttendanceRecord(None, 2, date(2026, 3, 2), datetime(2026, 3, 2, 10), SNAP, work_hours=9.5)) == 570


def test_report_totals_and_missed_checkouts(container, attendance_repo):
    _seed(attendance_repo, 2, date(2026, 3, 2), 10, datetime(2026, 3, 2, 19, 30))
    _seed(attendance_repo, 2, date(2026, 3, 3), 10)
    _seed(attendance_repo, 1, date(2026, 3, 3), 10, datetime(2026, 3, 3, 20, 0))

    data = container.report_service.build_attendance_report(
        current_role=Role.ADMIN, start=date(2026, 3, 1), end=date(2026, 3, 7), today=date(2026, 3, 4)
    )

    assert len(data.rows) == 3
    by_user = {s["user_id"]: s for s in data.summary}
    assert by_user[2]["total_hours"] == "09:30"
    assert by_user[2]["days_present"] == 2
    assert by_user[2]["missed_checkouts"] == 1
    assert by_user[1]["total_hours"] == "10:00"
    assert data.summary[0]["user_id"] == 1


def test_report_filters_user(container, attendance_repo):
    _seed(attendance_repo, 2, date(2026, 3, 2), 10)
    _seed(attendance_repo, 1, date(2026, 3, 2), 10)

    data = container.report_service.build_attendance_report(
        current_role=Role.SUB_ADMIN, start=date(2026, 3, 1), end=date(2026, 3, 7), today=date(2026, 3, 2), user_id=2
    )
    assert {r["user_id"] for r in data.rows} == {2}
    assert data.rows[0]["missed_checkout"] == "no"


def test_report_requires_admin_and_valid_range(container):
    with pytest.raises(AuthorizationError):
        container.report_service.build_attendance_report(
            current_role=Role.EMPLOYEE, start=date(2026, 3, 1), end=date(2026, 3, 7), today=date(2026, 3, 2)
        )
    with pytest.raises(ValidationError):
        container.report_service.build_attendance_report(
            current_role=Role.ADMIN, start=date(2026, 3, 7), end=date(2026, 3, 1), today=date(2026, 3, 2)
        )
