"""Per-day attendance state machine: NoRecord -> CheckedIn -> CheckedOut.

Pure functions; persistence and eligibility checks live in the service.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceAction, AttendanceStatus
from ..core.exceptions import DuplicateActionError, ValidationError
from .model import AttendanceRecord, LocationSnapshot

SECONDS_PER_HOUR = 3600.0


def check_in(
    existing: Optional[AttendanceRecord],
    *,
    user_id: int,
    now: datetime,
    snapshot: LocationSnapshot,
) -> AttendanceRecord:
    if existing is not None:
        raise DuplicateActionError("You have already checked in today")

    return AttendanceRecord(
        attendance_id=None,
        user_id=int(user_id),
        work_date=now.date(),
        check_in_time=now,
        check_in_location=snapshot,
    )


def check_out(
    existing: Optional[AttendanceRecord],
    *,
    now: datetime,
    snapshot: LocationSnapshot,
) -> AttendanceRecord:
    if existing is None:
        raise DuplicateActionError("You have not checked in today")
    if existing.status == AttendanceStatus.CHECKED_OUT:
        raise DuplicateActionError("You have already checked out today")
    if now <= existing.check_in_time:
        raise ValidationError("Check-out time must be after check-in time")

    work_hours = (now - existing.check_in_time).total_seconds() / SECONDS_PER_HOUR
    return replace(
        existing,
        check_out_time=now,
        check_out_location=snapshot,
        work_hours=work_hours,
    )


def apply_action(
    action: AttendanceAction,
    existing: Optional[AttendanceRecord],
    *,
    user_id: int,
    now: datetime,
    snapshot: LocationSnapshot,
) -> AttendanceRecord:
    if action == AttendanceAction.CHECK_IN:
        return check_in(existing, user_id=user_id, now=now, snapshot=snapshot)
    if action == AttendanceAction.CHECK_OUT:
        return check_out(existing, now=now, snapshot=snapshot)
    raise ValidationError('Invalid action. Use "check-in" or "check-out"')
