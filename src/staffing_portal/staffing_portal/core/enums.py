from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for permission checks."""

    ADMIN = "admin"
    SUB_ADMIN = "sub_admin"
    EMPLOYEE = "employee"
    USER = "user"


ADMIN_PANEL_ROLES = frozenset({Role.ADMIN, Role.SUB_ADMIN})
ATTENDANCE_ROLES = frozenset({Role.EMPLOYEE, Role.ADMIN})


class AttendanceAction(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class AttendanceStatus(str, Enum):
    """Stored status of a day's attendance record."""

    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    UNPAID = "unpaid"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Review workflow of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GeolocationFailure(str, Enum):
    """Reasons the device could not provide a position."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"


class AnnouncementPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


# Feed order: most pressing first.
ANNOUNCEMENT_PRIORITY_ORDER = (
    AnnouncementPriority.URGENT,
    AnnouncementPriority.HIGH,
    AnnouncementPriority.NORMAL,
    AnnouncementPriority.LOW,
)


class AnnouncementCategory(str, Enum):
    GENERAL = "general"
    HR = "hr"
    EVENT = "event"
    POLICY = "policy"
    ACHIEVEMENT = "achievement"


# Audiences an announcement can be addressed to.
ANNOUNCEMENT_AUDIENCES = frozenset({Role.USER, Role.EMPLOYEE, Role.ADMIN})


class ActivityAction(str, Enum):
    """What an admin did, as recorded in the activity log."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"
    PROMOTED = "promoted"


class ActivityEntity(str, Enum):
    JOB = "job"
    USER = "user"
    EMPLOYEE = "employee"
    ATTENDANCE = "attendance"
    SETTINGS = "settings"
