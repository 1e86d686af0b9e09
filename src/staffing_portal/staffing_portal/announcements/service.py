from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Optional

from ..activity.service import ActivityLogService
from ..common.datetime_utils import now_local, parse_iso_date, parse_local_datetime
from ..common.pagination import clamp_page, pagination_meta
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import (
    ADMIN_ANNOUNCEMENT_PAGE_SIZE_DEFAULT,
    ANNOUNCEMENT_CONTENT_MAX_LENGTH,
    ANNOUNCEMENT_FEED_PAGE_SIZE_DEFAULT,
    ANNOUNCEMENT_PAGE_SIZE_MAX,
    ANNOUNCEMENT_TITLE_MAX_LENGTH,
)
from ..core.enums import (
    ADMIN_PANEL_ROLES,
    ANNOUNCEMENT_AUDIENCES,
    ActivityAction,
    ActivityEntity,
    AnnouncementCategory,
    AnnouncementPriority,
    Role,
)
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


def _priority(value: Any) -> AnnouncementPriority:
    try:
        return AnnouncementPriority(value)
    except ValueError:
        raise ValidationError("Invalid priority")


def _category(value: Any) -> AnnouncementCategory:
    try:
        return AnnouncementCategory(value)
    except ValueError:
        raise ValidationError("Invalid category")


def _target_roles(value: Any) -> tuple[Role, ...]:
    if not isinstance(value, (list, tuple)) or not value:
        raise ValidationError("targetRoles must be a non-empty list")
    roles: list[Role] = []
    for raw in value:
        try:
            role = Role(raw)
        except ValueError:
            role = None
        if role not in ANNOUNCEMENT_AUDIENCES:
            raise ValidationError(f"Invalid target role: {raw}")
        if role not in roles:
            roles.append(role)
    return tuple(roles)


def _title(value: Any) -> str:
    title = require_non_empty(value, "Title")
    require_max_length(title, "Title", ANNOUNCEMENT_TITLE_MAX_LENGTH)
    return title


def _content(value: Any) -> str:
    content = require_non_empty(value, "Content")
    require_max_length(content, "Content", ANNOUNCEMENT_CONTENT_MAX_LENGTH)
    return content


class AnnouncementService:
    """Use case: admins publish announcements, everyone reads their feed."""

    def __init__(
        self,
        announcements: AnnouncementRepository,
        activity: Optional[ActivityLogService] = None,
        *,
        tz_name: Optional[str] = None,
    ):
        self._announcements = announcements
        self._activity = activity
        self._tz_name = tz_name

    def now(self) -> datetime:
        return now_local(self._tz_name)

    def _expiry(self, value: Any) -> Optional[datetime]:
        # A bare date keeps the announcement up until the end of that day.
        if value in (None, ""):
            return None
        text = str(value).strip()
        try:
            if len(text) == 10:
                return datetime.combine(parse_iso_date(text), time.max).replace(microsecond=0)
            return parse_local_datetime(text, self._tz_name)
        except ValueError:
            raise ValidationError("Invalid expiresAt")

    def get(self, announcement_id: int) -> Announcement:
        announcement = self._announcements.get_by_id(int(announcement_id))
        if not announcement:
            raise NotFoundError("Announcement not found")
        return announcement

    def create(
        self,
        *,
        current_role: Role,
        actor_id: int,
        title: Any,
        content: Any,
        priority: Any = None,
        category: Any = None,
        target_roles: Any = None,
        expires_at: Any = None,
    ) -> Announcement:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Admin access required")
        if not title or not content:
            raise ValidationError("Title and content are required")

        kind = _priority(priority or AnnouncementPriority.NORMAL.value)
        announcement_id = self._announcements.create(
            title=_title(title),
            content=_content(content),
            priority=kind,
            category=_category(category or AnnouncementCategory.GENERAL.value),
            target_roles=_target_roles(target_roles) if target_roles else (Role.EMPLOYEE,),
            expires_at=self._expiry(expires_at),
            created_by=int(actor_id),
        )
        announcement = self.get(announcement_id)
        logger.info("Announcement id=%s %r published by user_id=%s", announcement_id, announcement.title, actor_id)

        if self._activity is not None:
            self._activity.record(
                actor_id=actor_id,
                actor_role=current_role,
                action=ActivityAction.CREATED,
                entity_type=ActivityEntity.SETTINGS,
                entity_id=announcement_id,
                entity_name=announcement.title,
                description=f"Created announcement: {announcement.title}",
                metadata={
                    "priority": announcement.priority.value,
                    "targetRoles": [r.value for r in announcement.target_roles],
                },
            )
        return announcement

    def update(self, *, current_role: Role, announcement_id: int, changes: dict) -> Announcement:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        fields: dict[str, object] = {}
        if "title" in changes:
            fields["title"] = _title(changes["title"])
        if "content" in changes:
            fields["content"] = _content(changes["content"])
        if "priority" in changes:
            fields["priority"] = _priority(changes["priority"])
        if "category" in changes:
            fields["category"] = _category(changes["category"])
        if "targetRoles" in changes:
            fields["target_roles"] = _target_roles(changes["targetRoles"])
        if "expiresAt" in changes:
            fields["expires_at"] = self._expiry(changes["expiresAt"])
        if changes.get("isActive") is not None:
            if not isinstance(changes["isActive"], bool):
                raise ValidationError("isActive must be true or false")
            fields["is_active"] = changes["isActive"]

        if not self._announcements.update(int(announcement_id), fields=fields):
            raise NotFoundError("Announcement not found")
        logger.info("Announcement id=%s updated fields=%s", announcement_id, sorted(fields))
        return self.get(announcement_id)

    def delete(self, *, current_role: Role, announcement_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        if not self._announcements.delete(int(announcement_id)):
            raise NotFoundError("Announcement not found")
        logger.info("Announcement id=%s deleted", announcement_id)

    def list_admin(
        self,
        *,
        current_role: Role,
        is_active: Any = None,
        page: Any = 1,
        limit: Any = ADMIN_ANNOUNCEMENT_PAGE_SIZE_DEFAULT,
    ) -> dict:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Admin access required")

        page_n, limit_n = clamp_page(
            page, limit, default_limit=ADMIN_ANNOUNCEMENT_PAGE_SIZE_DEFAULT, max_limit=ANNOUNCEMENT_PAGE_SIZE_MAX
        )
        active = None if is_active in (None, "") else str(is_active).lower() == "true"
        rows, total = self._announcements.list_all(is_active=active, offset=(page_n - 1) * limit_n, limit=limit_n)
        now = self.now()
        return {
            "announcements": [row.to_dict(now) for row in rows],
            "pagination": pagination_meta(total, page_n, limit_n),
        }

    def feed(
        self,
        *,
        current_role: Optional[Role],
        category: Any = None,
        page: Any = 1,
        limit: Any = ANNOUNCEMENT_FEED_PAGE_SIZE_DEFAULT,
        now: Optional[datetime] = None,
    ) -> dict:
        """Active, unexpired announcements addressed to the caller's role."""
        role = current_role or Role.USER
        now = now or self.now()
        kind = _category(category) if category else None

        page_n, limit_n = clamp_page(
            page, limit, default_limit=ANNOUNCEMENT_FEED_PAGE_SIZE_DEFAULT, max_limit=ANNOUNCEMENT_PAGE_SIZE_MAX
        )
        rows, total = self._announcements.list_feed(
            role=role, now=now, category=kind, offset=(page_n - 1) * limit_n, limit=limit_n
        )
        counts = self._announcements.count_feed_by_priority(role=role, now=now, category=kind)
        return {
            "announcements": [row.to_dict(now) for row in rows],
            "summary": {
                "urgent": counts.get(AnnouncementPriority.URGENT, 0),
                "high": counts.get(AnnouncementPriority.HIGH, 0),
                "total": total,
            },
            "pagination": pagination_meta(total, page_n, limit_n),
        }
