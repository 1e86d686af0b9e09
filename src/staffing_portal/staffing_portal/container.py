from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .activity.mysql_activity_repository import MySQLActivityLogRepository
from .activity.repository import ActivityLogRepository
from .activity.service import ActivityLogService
from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.factory import TimeWindowPolicyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .reports.service import AttendanceReportService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    locations_repo: LocationRepository
    settings_repo: SettingsRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    announcements_repo: AnnouncementRepository
    activity_repo: ActivityLogRepository

    user_service: UserService
    location_service: LocationService
    settings_service: SettingsService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    leave_service: LeaveService
    announcement_service: AnnouncementService
    activity_service: ActivityLogService


def wire_services(
    *,
    users_repo: UserRepository,
    locations_repo: LocationRepository,
    settings_repo: SettingsRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    announcements_repo: AnnouncementRepository,
    activity_repo: ActivityLogRepository,
    tz_name: Optional[str] = None,
) -> Container:
    """Build services over any repository implementations (MySQL or in-memory)."""
    activity_service = ActivityLogService(activity_repo, users_repo, tz_name=tz_name)
    return Container(
        users_repo=users_repo,
        locations_repo=locations_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        announcements_repo=announcements_repo,
        activity_repo=activity_repo,
        user_service=UserService(users_repo),
        location_service=LocationService(locations_repo),
        settings_service=SettingsService(settings_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            locations_repo,
            settings_repo,
            users_repo,
            policy_factory=TimeWindowPolicyFactory(),
            tz_name=tz_name,
        ),
        report_service=AttendanceReportService(attendance_repo),
        leave_service=LeaveService(leave_repo, activity_service, tz_name=tz_name),
        announcement_service=AnnouncementService(announcements_repo, activity_service, tz_name=tz_name),
        activity_service=activity_service,
    )


def build_container(*, db_config: dict, tz_name: Optional[str] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        activity_repo=MySQLActivityLogRepository(conn),
        tz_name=tz_name,
    )
