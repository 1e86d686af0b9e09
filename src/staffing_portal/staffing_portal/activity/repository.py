from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from ..core.enums import ActivityAction, ActivityEntity, Role
from .model import ActivityFilter, ActivityLog


class ActivityLogRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        user_email: str,
        user_role: Role,
        action: ActivityAction,
        entity_type: ActivityEntity,
        description: str,
        created_at: datetime,
        entity_id: Optional[str] = None,
        entity_name: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> int:
        raise NotImplementedError

    def list_logs(
        self, *, filters: ActivityFilter, offset: int = 0, limit: int = 50
    ) -> tuple[Sequence[ActivityLog], int]:
        """Newest first; returns (page, total matching)."""

        raise NotImplementedError

    def delete_older_than(self, cutoff: datetime) -> int:
        raise NotImplementedError
