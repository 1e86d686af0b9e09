from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Any, Optional

from ..common.datetime_utils import now_local, parse_iso_date, parse_local_datetime
from ..common.pagination import clamp_page, pagination_meta
from ..core.constants import (
    ACTIVITY_LOG_PAGE_SIZE_DEFAULT,
    ACTIVITY_LOG_PAGE_SIZE_MAX,
    ACTIVITY_LOG_RETENTION_DAYS,
)
from ..core.enums import ActivityAction, ActivityEntity, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .model import ActivityFilter
from .repository import ActivityLogRepository

logger = logging.getLogger(__name__)


def _optional(enum_cls, value: Any):
    try:
        return enum_cls(value) if value else None
    except ValueError:
        return None


def _parse_bound(value: Any, *, end_of_day: bool, tz_name: Optional[str]) -> Optional[datetime]:
    """``YYYY-MM-DD`` covers the whole day; a full ISO datetime is used as given."""
    if not value:
        return None
    text = str(value).strip()
    try:
        if len(text) == 10:
            return datetime.combine(parse_iso_date(text), time.max if end_of_day else time.min)
        return parse_local_datetime(text, tz_name)
    except ValueError:
        raise ValidationError("Invalid date format")


class ActivityLogService:
    """Audit trail of admin actions (leave reviews, announcements)."""

    def __init__(
        self,
        logs: ActivityLogRepository,
        users: Optional[UserRepository] = None,
        *,
        tz_name: Optional[str] = None,
    ):
        self._logs = logs
        self._users = users
        self._tz_name = tz_name

    def record(
        self,
        *,
        actor_id: int,
        actor_role: Role,
        action: ActivityAction,
        entity_type: ActivityEntity,
        description: str,
        entity_id: Optional[Any] = None,
        entity_name: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Optional[int]:
        """Append an entry. Returns its id, or None when the write failed.

        A failed audit write is logged and never undoes the action it describes.
        """
        actor = self._users.get_by_id(int(actor_id)) if self._users is not None else None
        try:
            return self._logs.create(
                user_id=int(actor_id),
                user_email=actor.email if actor else "",
                user_role=actor_role,
                action=action,
                entity_type=entity_type,
                description=description,
                created_at=now_local(self._tz_name),
                entity_id=str(entity_id) if entity_id is not None else None,
                entity_name=entity_name,
                metadata=metadata,
            )
        except Exception:
            logger.exception("Failed to record activity %r by user_id=%s", description, actor_id)
            return None

    def list_logs(
        self,
        *,
        current_role: Role,
        action: Any = None,
        entity_type: Any = None,
        user_role: Any = None,
        start_date: Any = None,
        end_date: Any = None,
        page: Any = 1,
        limit: Any = ACTIVITY_LOG_PAGE_SIZE_DEFAULT,
    ) -> dict:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized - Super Admin access required")

        filters = ActivityFilter(
            action=_optional(ActivityAction, action),
            entity_type=_optional(ActivityEntity, entity_type),
            user_role=_optional(Role, user_role),
            start=_parse_bound(start_date, end_of_day=False, tz_name=self._tz_name),
            end=_parse_bound(end_date, end_of_day=True, tz_name=self._tz_name),
        )
        page_n, limit_n = clamp_page(
            page, limit, default_limit=ACTIVITY_LOG_PAGE_SIZE_DEFAULT, max_limit=ACTIVITY_LOG_PAGE_SIZE_MAX
        )
        logs, total = self._logs.list_logs(filters=filters, offset=(page_n - 1) * limit_n, limit=limit_n)
        return {"data": [log.to_dict() for log in logs], "pagination": pagination_meta(total, page_n, limit_n)}

    def purge_expired(self, *, now: Optional[datetime] = None) -> int:
        now = now or now_local(self._tz_name)
        removed = self._logs.delete_older_than(now - timedelta(days=ACTIVITY_LOG_RETENTION_DAYS))
        logger.info("Purged %s activity log entries older than %s days", removed, ACTIVITY_LOG_RETENTION_DAYS)
        return removed
