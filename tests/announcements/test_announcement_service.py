from datetime import datetime

import pytest

from src.staffing_portal.staffing_portal.core.enums import (
    ActivityAction,
    ActivityEntity,
    AnnouncementCategory,
    AnnouncementPriority,
    Role,
)
from src.staffing_portal.staffing_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError

NOW = datetime(2026, 3, 2, 10, 0, 0)


def _publish(service, title="Office closed Friday", **overrides):
    data = dict(current_role=Role.ADMIN, actor_id=1, title=title, content="Maintenance on all floors.")
    data.update(overrides)
    return service.create(**data)


def test_create_applies_defaults(container):
    announcement = _publish(container.announcement_service)

    assert announcement.priority == AnnouncementPriority.NORMAL
    assert announcement.category == AnnouncementCategory.GENERAL
    assert announcement.target_roles == (Role.EMPLOYEE,)
    assert announcement.is_active
    assert announcement.expires_at is None


def test_create_is_recorded_in_activity_log(container, activity_repo):
    announcement = _publish(container.announcement_service, priority="urgent", target_roles=["employee", "admin"])

    [entry] = activity_repo.logs
    assert entry.action == ActivityAction.CREATED
    assert entry.entity_type == ActivityEntity.SETTINGS
    assert entry.entity_id == str(announcement.announcement_id)
    assert entry.description == "Created announcement: Office closed Friday"
    assert entry.metadata == {"priority": "urgent", "targetRoles": ["employee", "admin"]}


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": ""}, "Title and content are required"),
        ({"content": None}, "Title and content are required"),
        ({"title": "t" * 151}, "Title cannot exceed 150"),
        ({"content": "c" * 2001}, "Content cannot exceed 2000"),
        ({"priority": "critical"}, "Invalid priority"),
        ({"category": "sports"}, "Invalid category"),
        ({"target_roles": ["sub_admin"]}, "Invalid target role"),
        ({"expires_at": "next week"}, "Invalid expiresAt"),
    ],
)
def test_create_validation(container, overrides, message):
    with pytest.raises(ValidationError, match=message):
        _publish(container.announcement_service, **overrides)


def test_employees_cannot_publish(container):
    with pytest.raises(AuthorizationError):
        _publish(container.announcement_service, current_role=Role.EMPLOYEE, actor_id=2)


def test_bare_expiry_date_lasts_the_whole_day(container):
    announcement = _publish(container.announcement_service, expires_at="2026-03-05")
    assert announcement.expires_at == datetime(2026, 3, 5, 23, 59, 59)


def test_feed_shows_visible_announcements_most_pressing_first(container):
    service = container.announcement_service
    _publish(service, title="Lunch menu", priority="low")
    _publish(service, title="Fire drill", priority="urgent")
    _publish(service, title="New policy", priority="high", category="policy")
    _publish(service, title="Old news", expires_at="2026-03-01")
    _publish(service, title="Admins only", target_roles=["admin"])
    hidden = _publish(service, title="Draft")
    service.update(current_role=Role.ADMIN, announcement_id=hidden.announcement_id, changes={"isActive": False})

    feed = service.feed(current_role=Role.EMPLOYEE, now=NOW)

    assert [a["title"] for a in feed["announcements"]] == ["Fire drill", "New policy", "Lunch menu"]
    assert feed["summary"] == {"urgent": 1, "high": 1, "total": 3}
    assert feed["pagination"]["pages"] == 1


def test_feed_filters_by_category_and_role(container):
    service = container.announcement_service
    _publish(service, title="New policy", category="policy")
    _publish(service, title="Open day", category="event", target_roles=["user"])

    policy = service.feed(current_role=Role.EMPLOYEE, category="policy", now=NOW)
    assert [a["title"] for a in policy["announcements"]] == ["New policy"]
    # Callers without a known role see what is addressed to plain users.
    assert [a["title"] for a in service.feed(current_role=None, now=NOW)["announcements"]] == ["Open day"]


def test_update_is_admin_only_and_partial(container):
    service = container.announcement_service
    announcement = _publish(service)

    with pytest.raises(AuthorizationError):
        service.update(current_role=Role.SUB_ADMIN, announcement_id=announcement.announcement_id, changes={})

    updated = service.update(
        current_role=Role.ADMIN,
        announcement_id=announcement.announcement_id,
        changes={"priority": "high", "targetRoles": ["employee", "user"], "expiresAt": None},
    )
    assert updated.priority == AnnouncementPriority.HIGH
    assert updated.target_roles == (Role.EMPLOYEE, Role.USER)
    assert updated.title == announcement.title


def test_delete(container):
    service = container.announcement_service
    announcement = _publish(service)

    service.delete(current_role=Role.ADMIN, announcement_id=announcement.announcement_id)
    with pytest.raises(NotFoundError):
        service.delete(current_role=Role.ADMIN, announcement_id=announcement.announcement_id)


def test_admin_list_filters_active(container):
    service = container.announcement_service
    first = _publish(service, title="First")
    _publish(service, title="Second")
    service.update(current_role=Role.ADMIN, announcement_id=first.announcement_id, changes={"isActive": False})

    data = service.list_admin(current_role=Role.SUB_ADMIN, is_active="true")
    assert [a["title"] for a in data["announcements"]] == ["Second"]
    assert data["announcements"][0]["author"]["email"] == "admin@example.com"
    assert service.list_admin(current_role=Role.SUB_ADMIN)["pagination"]["total"] == 2
