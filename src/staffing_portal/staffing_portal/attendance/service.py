from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import require_latitude, require_longitude
from ..core.constants import DEFAULT_ADMIN_LIST_LIMIT, DEFAULT_HISTORY_LIMIT
from ..core.enums import ADMIN_PANEL_ROLES, ATTENDANCE_ROLES, AttendanceAction, GeolocationFailure, Role
from ..core.exceptions import (
    AttendanceError,
    AuthorizationError,
    DomainError,
    LocationUnavailableError,
    ValidationError,
)
from ..locations.geofence import require_in_range
from ..locations.model import GeoPoint
from ..locations.repository import LocationRepository
from ..settings.repository import SettingsRepository
from ..users.repository import UserRepository
from .factory import TimeWindowPolicyFactory
from .model import AttendanceRecord, LocationSnapshot
from .repository import AttendanceRepository
from .transitions import apply_action

logger = logging.getLogger(__name__)

_GEOLOCATION_MESSAGES = {
    GeolocationFailure.PERMISSION_DENIED: (
        "Location permission denied. Please enable location access in your browser settings."
    ),
    GeolocationFailure.POSITION_UNAVAILABLE: "Location information is unavailable.",
    GeolocationFailure.TIMEOUT: "Location request timed out. Please try again.",
}

_SUCCESS_MESSAGES = {
    AttendanceAction.CHECK_IN: "Checked in successfully",
    AttendanceAction.CHECK_OUT: "Checked out successfully",
}

_STATUS_BY_CODE = {
    "VALIDATION": 400,
    "FORBIDDEN": 403,
    "TIME_WINDOW": 400,
    "OUT_OF_RANGE": 400,
    "LOCATION_UNAVAILABLE": 400,
    "DUPLICATE_ACTION": 409,
    "CONFIGURATION": 503,
}


@dataclass(frozen=True)
class MarkRequest:
    """Raw mark input as received from the client; validated inside ``mark``."""

    action: Any
    latitude: Any = None
    longitude: Any = None
    location_error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Optional[dict]) -> "MarkRequest":
        payload = payload or {}
        return cls(
            action=payload.get("action"),
            latitude=payload.get("latitude"),
            longitude=payload.get("longitude"),
            location_error=payload.get("locationError"),
        )

    def parsed_action(self) -> AttendanceAction:
        try:
            return AttendanceAction(self.action)
        except ValueError:
            raise ValidationError('Invalid action. Use "check-in" or "check-out"')

    def point(self) -> GeoPoint:
        if self.location_error:
            try:
                failure = GeolocationFailure(self.location_error)
            except ValueError:
                failure = GeolocationFailure.POSITION_UNAVAILABLE
            raise LocationUnavailableError(_GEOLOCATION_MESSAGES[failure])
        if self.latitude is None or self.longitude is None:
            raise LocationUnavailableError("Location coordinates are required")
        return GeoPoint(latitude=require_latitude(self.latitude), longitude=require_longitude(self.longitude))


@dataclass(frozen=True)
class MarkOutcome:
    """Result of a mark attempt. Rule failures are values, not exceptions."""

    success: bool
    message: Optional[str] = None
    record: Optional[AttendanceRecord] = None
    error_code: Optional[str] = None
    payload: dict = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, record: AttendanceRecord) -> "MarkOutcome":
        return cls(success=True, message=message, record=record)

    @classmethod
    def failed(cls, error: DomainError) -> "MarkOutcome":
        if isinstance(error, AttendanceError):
            return cls(success=False, message=str(error), error_code=error.code, payload=error.to_payload())
        code = "FORBIDDEN" if isinstance(error, AuthorizationError) else "VALIDATION"
        return cls(
            success=False,
            message=str(error),
            error_code=code,
            payload={"success": False, "error": str(error), "errorCode": code},
        )

    @property
    def http_status(self) -> int:
        if self.success:
            return 200
        return _STATUS_BY_CODE.get(self.error_code or "", 400)

    def to_payload(self) -> dict:
        if not self.success:
            return dict(self.payload)
        return {"success": True, "message": self.message, "record": self.record.to_dict()}


class AttendanceService:
    """Use case: geofenced, time-windowed check-in/check-out plus read models."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        locations: LocationRepository,
        settings: SettingsRepository,
        users: UserRepository | None = None,
        *,
        policy_factory: TimeWindowPolicyFactory | None = None,
        tz_name: Optional[str] = None,
    ):
        self._attendance = attendance
        self._locations = locations
        self._settings = settings
        self._users = users
        self._factory = policy_factory or TimeWindowPolicyFactory()
        self._tz_name = tz_name

    def now(self) -> datetime:
        return now_local(self._tz_name)

    def _require_attendance_user(self, user_id: int, current_role: Role) -> None:
        if current_role not in ATTENDANCE_ROLES:
            raise AuthorizationError("Only employees can mark attendance")
        if self._users is not None:
            user = self._users.get_by_id(int(user_id))
            if not user or not user.is_active:
                raise AuthorizationError("Account not found or inactive")

    def mark(
        self,
        user_id: int,
        request: MarkRequest,
        *,
        current_role: Role,
        now: datetime | None = None,
    ) -> MarkOutcome:
        now = now or self.now()
        # Stored as DATETIME(3).
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        try:
            action = request.parsed_action()
            self._require_attendance_user(user_id, current_role)
            point = request.point()

            nearest = require_in_range(point, self._locations.list_active())
            snapshot = LocationSnapshot(
                location_id=nearest.location.location_id,
                name=nearest.location.name,
                distance=nearest.distance,
                latitude=point.latitude,
                longitude=point.longitude,
            )

            self._factory.for_action(action).enforce(hour=now.hour, settings=self._settings.get_or_create())

            existing = self._attendance.get_for_user_and_date(int(user_id), now.date())
            record = apply_action(action, existing, user_id=int(user_id), now=now, snapshot=snapshot)
            if action == AttendanceAction.CHECK_IN:
                record = self._attendance.create_checkin(record)
            else:
                record = self._attendance.update_checkout(record)
        except DomainError as e:
            outcome = MarkOutcome.failed(e)
            logger.warning(
                "Attendance %s rejected for user_id=%s: %s (%s)",
                request.action,
                user_id,
                outcome.error_code,
                e,
            )
            return outcome

        logger.info(
            "Attendance %s for user_id=%s at %s (location=%r, distance=%.2fm)",
            action.value,
            user_id,
            now.isoformat(),
            snapshot.name,
            snapshot.distance,
        )
        return MarkOutcome.ok(_SUCCESS_MESSAGES[action], record)

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(int(user_id), today)

    def history(
        self,
        user_id: int,
        *,
        current_role: Role,
        month: Optional[int] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> dict:
        """Own history for the attendance page, newest first."""
        if current_role not in ATTENDANCE_ROLES:
            raise AuthorizationError("Only employees can view attendance")

        today = today or self.now().date()
        start = end = None
        if month is not None and year is not None:
            try:
                start, end = month_bounds(int(year), int(month))
            except ValueError as e:
                raise ValidationError(str(e))

        records = self._attendance.list_for_user(
            int(user_id), start_date=start, end_date=end, limit=DEFAULT_HISTORY_LIMIT
        )
        today_record = self.get_today_record(user_id, today)
        return {
            "attendance": [r.to_dict(today) for r in records],
            "todayAttendance": today_record.to_dict(today) if today_record else None,
            "locations": [loc.to_dict() for loc in self._locations.list_active()],
            "missedCheckouts": sum(1 for r in records if r.is_missed_checkout(today)),
        }

    def list_admin(
        self,
        *,
        current_role: Role,
        work_date: Optional[date] = None,
        user_id: Optional[int] = None,
        location_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> list[dict]:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Unauthorized")
        today = today or self.now().date()
        rows = self._attendance.list_admin_view(
            work_date=work_date,
            user_id=user_id,
            location_id=location_id,
            limit=DEFAULT_ADMIN_LIST_LIMIT,
        )
        return [row.to_dict(today) for row in rows]
