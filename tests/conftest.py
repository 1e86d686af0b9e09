"""In-memory repositories and wired services for the test suite."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.staffing_portal.staffing_portal.activity.model import ActivityLog
from src.staffing_portal.staffing_portal.announcements.model import Announcement, AnnouncementRow
from src.staffing_portal.staffing_portal.attendance.model import AttendanceReportRow
from src.staffing_portal.staffing_portal.container import wire_services
from src.staffing_portal.staffing_portal.core.enums import ANNOUNCEMENT_PRIORITY_ORDER, LeaveStatus, Role
from src.staffing_portal.staffing_portal.core.exceptions import DuplicateActionError
from src.staffing_portal.staffing_portal.leave.model import LeaveRequest, LeaveRow, LeaveStats
from src.staffing_portal.staffing_portal.locations.model import AllowedLocation
from src.staffing_portal.staffing_portal.settings.model import TimeSettings
from src.staffing_portal.staffing_portal.users.model import User

ADMIN_ID = 1
EMPLOYEE_ID = 2
SUB_ADMIN_ID = 3
PLAIN_USER_ID = 4


class FakeUsersRepo:
    def __init__(self, users=()):
        self._users = {u.user_id: u for u in users}
        self._next_id = max(self._users, default=0) + 1

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self._users.values() if u.email == email), None)

    def list_users(self, *, role=None):
        users = sorted(self._users.values(), key=lambda u: u.user_id, reverse=True)
        return [u for u in users if role is None or u.role == role]

    def create_user(self, *, full_name, email, password_hash, role):
        uid = self._next_id
        self._next_id += 1
        self._users[uid] = User(uid, full_name, email, password_hash, role)
        return uid

    def update_user(self, user_id, *, role=None, is_active=None):
        user = self._users.get(int(user_id))
        if not user:
            return False
        if role is not None:
            user = replace(user, role=role)
        if is_active is not None:
            user = replace(user, is_active=is_active)
        self._users[user.user_id] = user
        return True


class FakeLocationsRepo:
    def __init__(self, locations=()):
        self._locations = {loc.location_id: loc for loc in locations}
        self._next_id = max(self._locations, default=0) + 1

    def list_all(self):
        return [self._locations[k] for k in sorted(self._locations)]

    def list_active(self):
        return [loc for loc in self.list_all() if loc.is_active]

    def get_by_id(self, location_id):
        return self._locations.get(int(location_id))

    def create(self, *, name, address, latitude, longitude, radius, is_active=True):
        lid = self._next_id
        self._next_id += 1
        self._locations[lid] = AllowedLocation(lid, name, address, latitude, longitude, radius, is_active)
        return lid

    def update(self, location_id, *, fields):
        loc = self._locations.get(int(location_id))
        if not loc:
            return False
        self._locations[loc.location_id] = replace(loc, **fields)
        return True

    def delete(self, location_id):
        return self._locations.pop(int(location_id), None) is not None


class FakeSettingsRepo:
    def __init__(self, settings=None):
        self.settings = settings

    def get_or_create(self):
        if self.settings is None:
            self.settings = TimeSettings()
        return self.settings

    def save(self, *, check_in_start_hour, check_in_end_hour, check_out_start_hour, updated_by):
        self.settings = TimeSettings(
            check_in_start_hour=check_in_start_hour,
            check_in_end_hour=check_in_end_hour,
            check_out_start_hour=check_out_start_hour,
            updated_by=updated_by,
            updated_at=datetime(2026, 3, 1, 9, 0, 0),
        )
        return self.settings


class FakeAttendanceRepo:
    """Keyed by (user_id, work_date) like the UNIQUE constraint."""

    def __init__(self, users: FakeUsersRepo):
        self._users = users
        self.records = {}
        self._next_id = 1

    def get_for_user_and_date(self, user_id, work_date):
        return self.records.get((int(user_id), work_date))

    def create_checkin(self, record):
        key = (record.user_id, record.work_date)
        if key in self.records:
            raise DuplicateActionError("You have already checked in today. Refresh the page to see your status.")
        saved = replace(record, attendance_id=self._next_id)
        self._next_id += 1
        self.records[key] = saved
        return saved

    def update_checkout(self, record):
        key = (record.user_id, record.work_date)
        current = self.records.get(key)
        if current is None or current.check_out_time is not None:
            raise DuplicateActionError("You have already checked out today")
        self.records[key] = record
        return record

    def _rows(self, records):
        out = []
        for rec in records:
            user = self._users.get_by_id(rec.user_id)
            out.append(AttendanceReportRow(record=rec, full_name=user.full_name, email=user.email))
        return out

    def list_for_user(self, user_id, *, start_date=None, end_date=None, limit=31):
        recs = [
            r
            for (uid, d), r in self.records.items()
            if uid == int(user_id)
            and (start_date is None or d >= start_date)
            and (end_date is None or d <= end_date)
        ]
        recs.sort(key=lambda r: r.work_date, reverse=True)
        return recs[:limit]

    def list_admin_view(self, *, work_date=None, user_id=None, location_id=None, limit=100):
        recs = [
            r
            for r in self.records.values()
            if (work_date is None or r.work_date == work_date)
            and (user_id is None or r.user_id == user_id)
            and (location_id is None or r.check_in_location.location_id == location_id)
        ]
        recs.sort(key=lambda r: (r.work_date, r.check_in_time), reverse=True)
        return self._rows(recs[:limit])

    def get_report_rows(self, *, start_date, end_date, user_id=None):
        recs = [
            r
            for r in self.records.values()
            if start_date <= r.work_date <= end_date and (user_id is None or r.user_id == user_id)
        ]
        recs.sort(key=lambda r: (-r.work_date.toordinal(), r.user_id))
        return self._rows(recs)


class FakeLeaveRepo:
    def __init__(self, users: FakeUsersRepo):
        self._users = users
        self.leaves = {}
        self._next_id = 1

    def create(self, *, user_id, leave_type, start_date, end_date, reason, total_days):
        rid = self._next_id
        self._next_id += 1
        self.leaves[rid] = LeaveRequest(
            request_id=rid,
            user_id=user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            total_days=total_days,
            created_at=datetime(2026, 3, 1, 8, 0, rid % 60),
        )
        return rid

    def get_by_id(self, request_id):
        return self.leaves.get(int(request_id))

    def find_overlapping(self, *, user_id, start_date, end_date):
        for leave in self.leaves.values():
            if (
                leave.user_id == user_id
                and leave.status != LeaveStatus.REJECTED
                and leave.overlaps(start_date, end_date)
            ):
                return leave
        return None

    def _newest_first(self, leaves):
        return sorted(leaves, key=lambda x: x.request_id, reverse=True)

    def list_for_user(self, user_id, *, status=None, offset=0, limit=20):
        matches = self._newest_first(
            x for x in self.leaves.values() if x.user_id == user_id and (status is None or x.status == status)
        )
        return matches[offset : offset + limit], len(matches)

    def list_all(self, *, status=None, user_id=None, offset=0, limit=50):
        matches = self._newest_first(
            x
            for x in self.leaves.values()
            if (status is None or x.status == status) and (user_id is None or x.user_id == user_id)
        )
        rows = []
        for x in matches[offset : offset + limit]:
            user = self._users.get_by_id(x.user_id)
            rows.append(LeaveRow(leave=x, full_name=user.full_name, email=user.email))
        return rows, len(matches)

    def stats_by_status(self, *, user_id=None):
        out = {}
        for x in self.leaves.values():
            if user_id is not None and x.user_id != user_id:
                continue
            s = out.get(x.status, LeaveStats())
            out[x.status] = LeaveStats(count=s.count + 1, total_days=s.total_days + x.total_days)
        return out

    def review(self, request_id, *, status, reviewed_by, reviewed_at, review_note):
        leave = self.leaves.get(int(request_id))
        if not leave or leave.status != LeaveStatus.PENDING:
            return False
        self.leaves[leave.request_id] = replace(
            leave,
            status=status,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
            review_note=review_note if review_note is not None else leave.review_note,
        )
        return True

    def delete(self, request_id):
        return self.leaves.pop(int(request_id), None) is not None


class FakeAnnouncementsRepo:
    def __init__(self, users: FakeUsersRepo):
        self._users = users
        self.announcements = {}
        self._next_id = 1

    def create(self, *, title, content, priority, category, target_roles, expires_at, created_by):
        aid = self._next_id
        self._next_id += 1
        self.announcements[aid] = Announcement(
            announcement_id=aid,
            title=title,
            content=content,
            priority=priority,
            category=category,
            target_roles=tuple(target_roles),
            created_by=created_by,
            expires_at=expires_at,
            created_at=datetime(2026, 3, 1, 8, 0, aid % 60),
        )
        return aid

    def get_by_id(self, announcement_id):
        return self.announcements.get(int(announcement_id))

    def update(self, announcement_id, *, fields):
        current = self.announcements.get(int(announcement_id))
        if not current:
            return False
        self.announcements[current.announcement_id] = replace(current, **fields)
        return True

    def delete(self, announcement_id):
        return self.announcements.pop(int(announcement_id), None) is not None

    def _rows(self, items):
        out = []
        for a in items:
            author = self._users.get_by_id(a.created_by)
            out.append(AnnouncementRow(announcement=a, author_name=author.full_name, author_email=author.email))
        return out

    def list_all(self, *, is_active=None, offset=0, limit=50):
        matches = sorted(
            (a for a in self.announcements.values() if is_active is None or a.is_active == is_active),
            key=lambda a: a.announcement_id,
            reverse=True,
        )
        return self._rows(matches[offset : offset + limit]), len(matches)

    def _feed(self, role, now, category):
        return [
            a
            for a in self.announcements.values()
            if a.is_visible_to(role, now) and (category is None or a.category == category)
        ]

    def list_feed(self, *, role, now, category=None, offset=0, limit=10):
        matches = sorted(self._feed(role, now, category), key=lambda a: a.announcement_id, reverse=True)
        matches.sort(key=lambda a: ANNOUNCEMENT_PRIORITY_ORDER.index(a.priority))
        return self._rows(matches[offset : offset + limit]), len(matches)

    def count_feed_by_priority(self, *, role, now, category=None):
        out = {}
        for a in self._feed(role, now, category):
            out[a.priority] = out.get(a.priority, 0) + 1
        return out


class FakeActivityRepo:
    def __init__(self):
        self.logs = []

    def create(self, **fields):
        entry = ActivityLog(log_id=len(self.logs) + 1, **{**fields, "metadata": fields.get("metadata") or {}})
        self.logs.append(entry)
        return entry.log_id

    def list_logs(self, *, filters, offset=0, limit=50):
        matches = [
            log
            for log in reversed(self.logs)
            if (filters.action is None or log.action == filters.action)
            and (filters.entity_type is None or log.entity_type == filters.entity_type)
            and (filters.user_role is None or log.user_role == filters.user_role)
            and (filters.start is None or log.created_at >= filters.start)
            and (filters.end is None or log.created_at <= filters.end)
        ]
        return matches[offset : offset + limit], len(matches)

    def delete_older_than(self, cutoff):
        kept = [log for log in self.logs if log.created_at >= cutoff]
        removed = len(self.logs) - len(kept)
        self.logs = kept
        return removed


@pytest.fixture
def users_repo():
    return FakeUsersRepo(
        [
            User(ADMIN_ID, "Admin Demo", "admin@example.com", "x", Role.ADMIN),
            User(EMPLOYEE_ID, "Employee Demo", "employee@example.com", "x", Role.EMPLOYEE),
            User(SUB_ADMIN_ID, "Sub Admin", "sub@example.com", "x", Role.SUB_ADMIN),
            User(PLAIN_USER_ID, "Job Seeker", "seeker@example.com", "x", Role.USER),
        ]
    )


@pytest.fixture
def office():
    return AllowedLocation(1, "Head Office", "1 Main Street", 0.0, 0.0, 100.0)


@pytest.fixture
def locations_repo(office):
    return FakeLocationsRepo([office])


@pytest.fixture
def settings_repo():
    return FakeSettingsRepo()


@pytest.fixture
def attendance_repo(users_repo):
    return FakeAttendanceRepo(users_repo)


@pytest.fixture
def leave_repo(users_repo):
    return FakeLeaveRepo(users_repo)


@pytest.fixture
def announcements_repo(users_repo):
    return FakeAnnouncementsRepo(users_repo)


@pytest.fixture
def activity_repo():
    return FakeActivityRepo()


@pytest.fixture
def container(
    users_repo, locations_repo, settings_repo, attendance_repo, leave_repo, announcements_repo, activity_repo
):
    return wire_services(
        users_repo=users_repo,
        locations_repo=locations_repo,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        announcements_repo=announcements_repo,
        activity_repo=activity_repo,
    )
