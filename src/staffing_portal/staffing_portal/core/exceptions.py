from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when no authenticated identity is available."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class AttendanceError(DomainError):
    """Base for rejections produced by the attendance engine.

    Each subclass carries a stable ``code`` so callers can branch on the
    failure kind without parsing messages.
    """

    code = "ATTENDANCE_ERROR"

    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "error": str(self), "errorCode": self.code}


class ConfigurationError(AttendanceError):
    """No allowed location is configured. Needs an admin to fix."""

    code = "CONFIGURATION"


class OutOfRangeError(AttendanceError):
    """The user's position is outside the nearest location's radius."""

    code = "OUT_OF_RANGE"

    def __init__(self, message: str, *, location_name: str, distance: float, required_radius: float):
        super().__init__(message)
        self.location_name = location_name
        self.distance = distance
        self.required_radius = required_radius

    @property
    def shortfall(self) -> float:
        """Meters the user still has to close to be in range."""
        return self.distance - self.required_radius

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["nearestLocation"] = {
            "name": self.location_name,
            "distance": self.distance,
            "requiredRadius": self.required_radius,
            "shortfall": self.shortfall,
        }
        return payload


class TimeWindowError(AttendanceError):
    """Action attempted outside its permitted hours."""

    code = "TIME_WINDOW"

    def __init__(self, message: str, *, action: str, start_hour: int, end_hour: Optional[int] = None):
        super().__init__(message)
        self.action = action
        self.start_hour = start_hour
        self.end_hour = end_hour

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["allowedWindow"] = {
            "action": self.action,
            "startHour": self.start_hour,
            "endHour": self.end_hour,
        }
        return payload


class DuplicateActionError(AttendanceError):
    """Check-in/check-out conflicts with today's record."""

    code = "DUPLICATE_ACTION"


class LocationUnavailableError(AttendanceError):
    """The device could not report a position (denied, timeout, unavailable)."""

    code = "LOCATION_UNAVAILABLE"
