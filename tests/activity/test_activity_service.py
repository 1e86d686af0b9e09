from dataclasses import replace
from datetime import datetime

import pytest

from src.staffing_portal.staffing_portal.core.enums import ActivityAction, ActivityEntity, Role
from src.staffing_portal.staffing_portal.core.exceptions import AuthorizationError, ValidationError


def _record(service, **overrides):
    data = dict(
        actor_id=1,
        actor_role=Role.ADMIN,
        action=ActivityAction.UPDATED,
        entity_type=ActivityEntity.ATTENDANCE,
        description="Approved leave request",
    )
    data.update(overrides)
    return service.record(**data)


def test_record_captures_actor_email(container, activity_repo):
    log_id = _record(container.activity_service, entity_id=7)

    entry = activity_repo.logs[0]
    assert entry.log_id == log_id
    assert entry.user_email == "admin@example.com"
    assert entry.entity_id == "7"


def test_only_super_admin_reads_logs(container):
    with pytest.raises(AuthorizationError, match="Super Admin"):
        container.activity_service.list_logs(current_role=Role.SUB_ADMIN)


def test_list_filters_and_paginates(container):
    service = container.activity_service
    _record(service)
    _record(service, actor_id=3, actor_role=Role.SUB_ADMIN, action=ActivityAction.CREATED)
    _record(service, actor_id=3, actor_role=Role.SUB_ADMIN, entity_type=ActivityEntity.SETTINGS)

    data = service.list_logs(current_role=Role.ADMIN, user_role="sub_admin", limit=1)
    assert data["pagination"] == {"total": 2, "page": 1, "limit": 1, "pages": 2}
    assert data["data"][0]["entityType"] == "settings"

    created = service.list_logs(current_role=Role.ADMIN, action="created")["data"]
    assert [e["userEmail"] for e in created] == ["sub@example.com"]

    # Unknown filter values are ignored.
    assert service.list_logs(current_role=Role.ADMIN, action="exploded")["pagination"]["total"] == 3


def test_list_rejects_bad_dates(container):
    with pytest.raises(ValidationError):
        container.activity_service.list_logs(current_role=Role.ADMIN, start_date="yesterday")


def test_date_range_is_inclusive_of_end_day(container, activity_repo):
    _record(container.activity_service)
    day = activity_repo.logs[0].created_at.date().isoformat()

    data = container.activity_service.list_logs(current_role=Role.ADMIN, start_date=day, end_date=day)
    assert data["pagination"]["total"] == 1


def test_purge_drops_entries_past_retention(container, activity_repo):
    _record(container.activity_service)
    _record(container.activity_service)
    activity_repo.logs[0] = replace(activity_repo.logs[0], created_at=datetime(2025, 1, 1))
    activity_repo.logs[1] = replace(activity_repo.logs[1], created_at=datetime(2026, 3, 1))

    removed = container.activity_service.purge_expired(now=datetime(2026, 3, 2))

    assert removed == 1
    assert len(activity_repo.logs) == 1
