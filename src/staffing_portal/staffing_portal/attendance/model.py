from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class LocationSnapshot:
    """Copy of the matched location taken when attendance is marked.

    Not a live reference: later edits or deletion of the location leave it untouched.
    """

    location_id: int
    name: str
    distance: float
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {
            "locationId": self.location_id,
            "locationName": self.name,
            "distance": self.distance,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day."""

    attendance_id: Optional[int]
    user_id: int
    work_date: date
    check_in_time: datetime
    check_in_location: LocationSnapshot
    check_out_time: Optional[datetime] = None
    check_out_location: Optional[LocationSnapshot] = None
    work_hours: Optional[float] = None
    note: Optional[str] = None

    @property
    def status(self) -> AttendanceStatus:
        if self.check_out_time is None:
            return AttendanceStatus.CHECKED_IN
        return AttendanceStatus.CHECKED_OUT

    def is_missed_checkout(self, today: date) -> bool:
        """A past day that never reached checkout."""
        return self.status == AttendanceStatus.CHECKED_IN and self.work_date < today

    def to_dict(self, today: Optional[date] = None) -> dict:
        data = {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "checkIn": _iso(self.check_in_time),
            "checkOut": _iso(self.check_out_time),
            "checkInLocation": self.check_in_location.to_dict(),
            "checkOutLocation": self.check_out_location.to_dict() if self.check_out_location else None,
            "status": self.status.value,
            "workHours": self.work_hours,
            "notes": self.note,
        }
        if today is not None:
            data["missedCheckout"] = self.is_missed_checkout(today)
        return data


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for admin lists and exports (record joined with its user)."""

    record: AttendanceRecord
    full_name: str
    email: str

    def to_dict(self, today: Optional[date] = None) -> dict:
        data = self.record.to_dict(today)
        data["user"] = {"id": self.record.user_id, "fullName": self.full_name, "email": self.email}
        return data
