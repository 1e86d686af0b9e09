from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import ActivityAction, ActivityEntity, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import ActivityFilter, ActivityLog
from .repository import ActivityLogRepository

_COLUMNS = """
    log_id, user_id, user_email, user_role, action, entity_type,
    entity_id, entity_name, description, metadata, created_at
"""


def _row_to_log(r: dict) -> ActivityLog:
    raw = r.get("metadata")
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    return ActivityLog(
        log_id=int(r["log_id"]),
        user_id=int(r["user_id"]),
        user_email=r["user_email"],
        user_role=Role(r["user_role"]),
        action=ActivityAction(r["action"]),
        entity_type=ActivityEntity(r["entity_type"]),
        description=r["description"],
        created_at=r["created_at"],
        entity_id=r.get("entity_id"),
        entity_name=r.get("entity_name"),
        metadata=json.loads(raw) if raw else {},
    )


def _where(filters: ActivityFilter) -> tuple[str, list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if filters.action is not None:
        clauses.append("action=%s")
        params.append(filters.action.value)
    if filters.entity_type is not None:
        clauses.append("entity_type=%s")
        params.append(filters.entity_type.value)
    if filters.user_role is not None:
        clauses.append("user_role=%s")
        params.append(filters.user_role.value)
    if filters.start is not None:
        clauses.append("created_at >= %s")
        params.append(filters.start)
    if filters.end is not None:
        clauses.append("created_at <= %s")
        params.append(filters.end)
    return build_where(clauses), params


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_logs(
                    user_id, user_email, user_role, action, entity_type,
                    entity_id, entity_name, description, metadata, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    user_email,
                    user_role.value,
                    action.value,
                    entity_type.value,
                    entity_id,
                    entity_name,
                    description,
                    json.dumps(metadata, default=str) if metadata else None,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def list_logs(
        self, *, filters: ActivityFilter, offset: int = 0, limit: int = 50
    ) -> tuple[Sequence[ActivityLog], int]:
        where, params = _where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM activity_logs WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM activity_logs
                WHERE {where}
                ORDER BY created_at DESC, log_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_row_to_log(r) for r in fetchall(cur)], total

    def delete_older_than(self, cutoff: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM activity_logs WHERE created_at < %s", (cutoff,))
            return int(cur.rowcount)
