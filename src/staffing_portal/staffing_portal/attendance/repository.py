from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert today's record.

        Must raise DuplicateActionError when (user_id, work_date) already exists,
        including when a concurrent request won the insert.
        """

        raise NotImplementedError

    def update_checkout(self, record: AttendanceRecord) -> AttendanceRecord:
        """Fill checkout fields once; DuplicateActionError if already checked out."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 31,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_admin_view(
        self,
        *,
        work_date: Optional[date] = None,
        user_id: Optional[int] = None,
        location_id: Optional[int] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
