from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ANNOUNCEMENT_PRIORITY_ORDER, AnnouncementCategory, AnnouncementPriority, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, fetchall, fetchone
from .model import Announcement, AnnouncementRow
from .repository import AnnouncementRepository

_COLUMNS = """
    a.announcement_id, a.title, a.content, a.priority, a.category, a.target_roles,
    a.is_active, a.expires_at, a.created_by, a.created_at, a.updated_at
"""

_UPDATABLE = ("title", "content", "priority", "category", "target_roles", "expires_at", "is_active")

_PRIORITY_RANK_SQL = "FIELD(a.priority, {})".format(", ".join(f"'{p.value}'" for p in ANNOUNCEMENT_PRIORITY_ORDER))


def _roles_to_db(roles: Sequence[Role]) -> str:
    return ",".join(r.value for r in roles)


def _roles_from_db(raw: Optional[str]) -> tuple[Role, ...]:
    return tuple(Role(part) for part in (raw or "").split(",") if part)


def _row_to_announcement(r: dict) -> Announcement:
    return Announcement(
        announcement_id=int(r["announcement_id"]),
        title=r["title"],
        content=r["content"],
        priority=AnnouncementPriority(r["priority"]),
        category=AnnouncementCategory(r["category"]),
        target_roles=_roles_from_db(r.get("target_roles")),
        created_by=int(r["created_by"]),
        is_active=bool(r.get("is_active", True)),
        expires_at=r.get("expires_at"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _row_to_listing(r: dict) -> AnnouncementRow:
    return AnnouncementRow(
        announcement=_row_to_announcement(r),
        author_name=r["full_name"],
        author_email=r["email"],
    )


def _feed_where(role: Role, now: datetime, category: Optional[AnnouncementCategory]) -> tuple[str, list[object]]:
    clauses = [
        "a.is_active=1",
        "FIND_IN_SET(%s, a.target_roles) > 0",
        "(a.expires_at IS NULL OR a.expires_at > %s)",
    ]
    params: list[object] = [role.value, now]
    if category is not None:
        clauses.append("a.category=%s")
        params.append(category.value)
    return build_where(clauses), params


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO announcements(
                    title, content, priority, category, target_roles, is_active, expires_at, created_by
                )
                VALUES(%s,%s,%s,%s,%s,1,%s,%s)
                """,
                (
                    title,
                    content,
                    priority.value,
                    category.value,
                    _roles_to_db(target_roles),
                    expires_at,
                    int(created_by),
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM announcements a WHERE a.announcement_id=%s",
                (int(announcement_id),),
            )
            r = fetchone(cur)
            return _row_to_announcement(r) if r else None

    def update(self, announcement_id: int, *, fields: dict) -> bool:
        assignments = []
        params: list[object] = []
        for column in _UPDATABLE:
            if column not in fields:
                continue
            value = fields[column]
            if column == "is_active":
                value = int(bool(value))
            elif column == "target_roles":
                value = _roles_to_db(value)
            elif column in ("priority", "category"):
                value = value.value
            assignments.append(f"{column}=%s")
            params.append(value)
        if not assignments:
            return self.get_by_id(announcement_id) is not None

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE announcements SET {', '.join(assignments)} WHERE announcement_id=%s",
                tuple(params + [int(announcement_id)]),
            )
            if cur.rowcount > 0:
                return True
        return self.get_by_id(announcement_id) is not None

    def delete(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE announcement_id=%s", (int(announcement_id),))
            return cur.rowcount > 0

    def list_all(
        self, *, is_active: Optional[bool] = None, offset: int = 0, limit: int = 50
    ) -> tuple[Sequence[AnnouncementRow], int]:
        clauses: list[str] = []
        params: list[object] = []
        if is_active is not None:
            clauses.append("a.is_active=%s")
            params.append(int(is_active))
        where = build_where(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM announcements a WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.full_name, u.email
                FROM announcements a
                JOIN users u ON u.user_id = a.created_by
                WHERE {where}
                ORDER BY a.created_at DESC, a.announcement_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_row_to_listing(r) for r in fetchall(cur)], total

    def list_feed(
        self,
        *,
        role: Role,
        now: datetime,
        category: Optional[AnnouncementCategory] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[Sequence[AnnouncementRow], int]:
        where, params = _feed_where(role, now, category)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM announcements a WHERE {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))
            cur.execute(
                f"""
                SELECT {_COLUMNS}, u.full_name, u.email
                FROM announcements a
                JOIN users u ON u.user_id = a.created_by
                WHERE {where}
                ORDER BY {_PRIORITY_RANK_SQL}, a.created_at DESC, a.announcement_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_row_to_listing(r) for r in fetchall(cur)], total

    def count_feed_by_priority(
        self, *, role: Role, now: datetime, category: Optional[AnnouncementCategory] = None
    ) -> dict[AnnouncementPriority, int]:
        where, params = _feed_where(role, now, category)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT a.priority, COUNT(*) AS cnt FROM announcements a WHERE {where} GROUP BY a.priority",
                tuple(params),
            )
            return {AnnouncementPriority(r["priority"]): int(r["cnt"]) for r in fetchall(cur)}
