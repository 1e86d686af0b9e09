from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


def leave_days(start_date: date, end_date: date) -> int:
    """Inclusive day count of a leave span."""
    return (end_date - start_date).days + 1


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    total_days: int
    created_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    review_note: Optional[str] = None

    def overlaps(self, start_date: date, end_date: date) -> bool:
        return self.start_date <= end_date and self.end_date >= start_date

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "userId": self.user_id,
            "leaveType": self.leave_type.value,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "totalDays": self.total_days,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "reviewedBy": self.reviewed_by,
            "reviewedAt": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "reviewNote": self.review_note,
        }


@dataclass(frozen=True)
class LeaveRow:
    """Admin list row: a leave request joined with its employee."""

    leave: LeaveRequest
    full_name: str
    email: str

    def to_dict(self) -> dict:
        data = self.leave.to_dict()
        data["employee"] = {"id": self.leave.user_id, "fullName": self.full_name, "email": self.email}
        return data


@dataclass(frozen=True)
class LeaveStats:
    count: int = 0
    total_days: int = 0
