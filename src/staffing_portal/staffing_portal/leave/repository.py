from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest, LeaveRow, LeaveStats


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_overlapping(self, *, user_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        """First non-rejected leave of ``user_id`` intersecting [start_date, end_date]."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        status: Optional[LeaveStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[Sequence[LeaveRequest], int]:
        """Newest first; returns (page, total matching)."""

        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[Sequence[LeaveRow], int]:
        raise NotImplementedError

    def stats_by_status(self, *, user_id: Optional[int] = None) -> dict[LeaveStatus, LeaveStats]:
        raise NotImplementedError

    def review(
        self,
        request_id: int,
        *,
        status: LeaveStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        review_note: Optional[str],
    ) -> bool:
        """Decide a pending request. False when it is no longer pending."""

        raise NotImplementedError

    def delete(self, request_id: int) -> bool:
        raise NotImplementedError
