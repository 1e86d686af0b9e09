from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateActionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow, LocationSnapshot
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    ar.attendance_id, ar.user_id, ar.work_date, ar.check_in_time, ar.check_out_time,
    ar.check_in_location_id, ar.check_in_location_name, ar.check_in_distance,
    ar.check_in_latitude, ar.check_in_longitude,
    ar.check_out_location_id, ar.check_out_location_name, ar.check_out_distance,
    ar.check_out_latitude, ar.check_out_longitude,
    ar.work_hours, ar.note
"""


def _snapshot(r: dict, prefix: str) -> Optional[LocationSnapshot]:
    if r.get(f"{prefix}_location_id") is None:
        return None
    return LocationSnapshot(
        location_id=int(r[f"{prefix}_location_id"]),
        name=r[f"{prefix}_location_name"],
        distance=float(r[f"{prefix}_distance"]),
        latitude=float(r[f"{prefix}_latitude"]),
        longitude=float(r[f"{prefix}_longitude"]),
    )


def _row_to_record(r: dict) -> AttendanceRecord:
    work_hours = r.get("work_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_in_location=_snapshot(r, "check_in"),
        check_out_time=r.get("check_out_time"),
        check_out_location=_snapshot(r, "check_out"),
        work_hours=float(work_hours) if work_hours is not None else None,
        note=r.get("note"),
    )


def _row_to_report_row(r: dict) -> AttendanceReportRow:
    return AttendanceReportRow(record=_row_to_record(r), full_name=r["full_name"], email=r["email"])


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_checkin(self, record: AttendanceRecord) -> AttendanceRecord:
        loc = record.check_in_location
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, check_in_time,
                        check_in_location_id, check_in_location_name, check_in_distance,
                        check_in_latitude, check_in_longitude,
                        status, note
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.user_id,
                        record.work_date,
                        record.check_in_time,
                        loc.location_id,
                        loc.name,
                        loc.distance,
                        loc.latitude,
                        loc.longitude,
                        AttendanceStatus.CHECKED_IN.value,
                        record.note,
                    ),
                )
                attendance_id = int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateActionError(
                    "You have already checked in today. Refresh the page to see your status."
                ) from e
            raise

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in_time=record.check_in_time,
            check_in_location=loc,
            note=record.note,
        )

    def update_checkout(self, record: AttendanceRecord) -> AttendanceRecord:
        loc = record.check_out_location
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s,
                    check_out_location_id=%s, check_out_location_name=%s, check_out_distance=%s,
                    check_out_latitude=%s, check_out_longitude=%s,
                    work_hours=%s, status=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (
                    record.check_out_time,
                    loc.location_id,
                    loc.name,
                    loc.distance,
                    loc.latitude,
                    loc.longitude,
                    record.work_hours,
                    AttendanceStatus.CHECKED_OUT.value,
                    record.attendance_id,
                ),
            )
            if cur.rowcount == 0:
                raise DuplicateActionError("You have already checked out today")
        return record

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 31,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["ar.user_id=%s"]
        params: list[object] = [int(user_id)]
        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE {build_where(clauses)}
                ORDER BY ar.work_date DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_admin_view(
        self,
        *,
        work_date: Optional[date] = None,
        user_id: Optional[int] = None,
        location_id: Optional[int] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceReportRow]:
        clauses: list[str] = []
        params: list[object] = []
        if work_date is not None:
            clauses.append("ar.work_date=%s")
            params.append(work_date)
        if user_id is not None:
            clauses.append("ar.user_id=%s")
            params.append(int(user_id))
        if location_id is not None:
            clauses.append("ar.check_in_location_id=%s")
            params.append(int(location_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, u.full_name, u.email
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                WHERE {build_where(clauses)}
                ORDER BY ar.work_date DESC, ar.check_in_time DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_report_row(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("ar.user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}, u.full_name, u.email
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                WHERE {build_where(clauses)}
                ORDER BY ar.work_date DESC, u.user_id ASC
                """,
                tuple(params),
            )
            return [_row_to_report_row(r) for r in fetchall(cur)]
