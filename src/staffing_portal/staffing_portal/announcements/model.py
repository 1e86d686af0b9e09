from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AnnouncementCategory, AnnouncementPriority, Role


@dataclass(frozen=True)
class Announcement:
    announcement_id: int
    title: str
    content: str
    priority: AnnouncementPriority
    category: AnnouncementCategory
    target_roles: tuple[Role, ...]
    created_by: int
    is_active: bool = True
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now > self.expires_at

    def is_visible_to(self, role: Role, now: datetime) -> bool:
        """Active, unexpired and addressed to ``role``."""
        return self.is_active and role in self.target_roles and not self.is_expired(now)

    def to_dict(self, now: Optional[datetime] = None) -> dict:
        return {
            "id": self.announcement_id,
            "title": self.title,
            "content": self.content,
            "priority": self.priority.value,
            "category": self.category.value,
            "targetRoles": [r.value for r in self.target_roles],
            "isActive": self.is_active,
            "isExpired": self.is_expired(now) if now else None,
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class AnnouncementRow:
    """An announcement joined with its author."""

    announcement: Announcement
    author_name: str
    author_email: str

    def to_dict(self, now: Optional[datetime] = None) -> dict:
        data = self.announcement.to_dict(now)
        data["author"] = {
            "id": self.announcement.created_by,
            "fullName": self.author_name,
            "email": self.author_email,
        }
        return data
