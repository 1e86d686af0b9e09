from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import LeaveRequest, LeaveRow, LeaveStats
from .repository import LeaveRepository

_COLUMNS = """
    r.request_id, r.user_id, r.leave_type, r.start_date, r.end_date, r.reason,
    r.status, r.total_days, r.created_at, r.reviewed_by, r.reviewed_at, r.review_note
"""


def _row_to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        total_days=int(r["total_days"]),
        created_at=r.get("created_at"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        review_note=r.get("review_note"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        total_days: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, start_date, end_date, reason, status, total_days)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    reason,
                    LeaveStatus.PENDING.value,
                    int(total_days),
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests r WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def find_overlapping(self, *, user_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests r
                WHERE r.user_id=%s AND r.status<>%s
                  AND r.start_date <= %s AND r.end_date >= %s
                ORDER BY r.start_date
                LIMIT 1
                """,
                (int(user_id), LeaveStatus.REJECTED.value, end_date, start_date),
            )
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def list_for_user(
        self,
        user_id: int,
        *,
        status: Optional[LeaveStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[LeaveRequest], int]:
        clauses = ["r.user_id=%s"]
        params: list[object] = [int(user_id)]
        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        where = build_where(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM leave_requests r WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests r
                WHERE {where}
                ORDER BY r.created_at DESC, r.request_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_row_to_leave(r) for r in fetchall(cur)], total

    def list_all(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[Sequence[LeaveRow], int]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("r.user_id=%s")
            params.append(int(user_id))
        where = build_where(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM leave_requests r WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.full_name, u.email
                FROM leave_requests r
                JOIN users u ON u.user_id = r.user_id
                WHERE {where}
                ORDER BY r.created_at DESC, r.request_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            rows = [
                LeaveRow(leave=_row_to_leave(r), full_name=r["full_name"], email=r["email"])
                for r in fetchall(cur)
            ]
            return rows, total

    def stats_by_status(self, *, user_id: Optional[int] = None) -> dict[LeaveStatus, LeaveStats]:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT status, COUNT(*) AS cnt, COALESCE(SUM(total_days), 0) AS days
                FROM leave_requests
                WHERE {build_where(clauses)}
                GROUP BY status
                """,
                tuple(params),
            )
            return {
                LeaveStatus(r["status"]): LeaveStats(count=int(r["cnt"]), total_days=int(r["days"]))
                for r in fetchall(cur)
            }

    def review(
        self,
        request_id: int,
        *,
        status: LeaveStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        review_note: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, reviewed_at=%s, review_note=COALESCE(%s, review_note)
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(reviewed_by),
                    reviewed_at,
                    review_note,
                    int(request_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0
