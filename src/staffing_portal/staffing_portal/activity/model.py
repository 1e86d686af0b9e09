from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import ActivityAction, ActivityEntity, Role


@dataclass(frozen=True)
class ActivityLog:
    """One audited admin action. Kept for a limited retention window."""

    log_id: int
    user_id: int
    user_email: str
    user_role: Role
    action: ActivityAction
    entity_type: ActivityEntity
    description: str
    created_at: datetime
    entity_id: Optional[str] = None
    entity_name: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "userId": self.user_id,
            "userEmail": self.user_email,
            "userRole": self.user_role.value,
            "action": self.action.value,
            "entityType": self.entity_type.value,
            "entityId": self.entity_id,
            "entityName": self.entity_name,
            "description": self.description,
            "metadata": dict(self.metadata),
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ActivityFilter:
    action: Optional[ActivityAction] = None
    entity_type: Optional[ActivityEntity] = None
    user_role: Optional[Role] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
