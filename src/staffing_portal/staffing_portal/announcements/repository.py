from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AnnouncementCategory, AnnouncementPriority, Role
from .model import Announcement, AnnouncementRow


class AnnouncementRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        content: str,
        priority: AnnouncementPriority,
        category: AnnouncementCategory,
        target_roles: Sequence[Role],
        expires_at: Optional[datetime],
        created_by: int,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

    def update(self, announcement_id: int, *, fields: dict) -> bool:
        raise NotImplementedError

    def delete(self, announcement_id: int) -> bool:
        raise NotImplementedError

    def list_all(
        self, *, is_active: Optional[bool] = None, offset: int = 0, limit: int = 50
    ) -> tuple[Sequence[AnnouncementRow], int]:
        """Newest first; returns (page, total matching)."""

        raise NotImplementedError

    def list_feed(
        self,
        *,
        role: Role,
        now: datetime,
        category: Optional[AnnouncementCategory] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[Sequence[AnnouncementRow], int]:
        """Visible announcements for ``role``, most pressing then newest first."""

        raise NotImplementedError

    def count_feed_by_priority(
        self, *, role: Role, now: datetime, category: Optional[AnnouncementCategory] = None
    ) -> dict[AnnouncementPriority, int]:
        raise NotImplementedError
