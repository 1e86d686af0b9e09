from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AllowedLocation
from .repository import LocationRepository

_COLUMNS = "location_id, name, address, latitude, longitude, radius, is_active, created_at"

_UPDATABLE = ("name", "address", "latitude", "longitude", "radius", "is_active")


def _row_to_location(r: dict) -> AllowedLocation:
    return AllowedLocation(
        location_id=int(r["location_id"]),
        name=r["name"],
        address=r["address"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        radius=float(r["radius"]),
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AllowedLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_locations ORDER BY created_at DESC, location_id DESC")
            return [_row_to_location(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[AllowedLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_locations WHERE is_active=1 ORDER BY location_id")
            return [_row_to_location(r) for r in fetchall(cur)]

    def get_by_id(self, location_id: int) -> Optional[AllowedLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_locations WHERE location_id=%s", (int(location_id),))
            r = fetchone(cur)
            return _row_to_location(r) if r else None

    def create(
        self,
        *,
        name: str,
        address: str,
        latitude: float,
        longitude: float,
        radius: float,
        is_active: bool = True,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_locations(name, address, latitude, longitude, radius, is_active)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, address, latitude, longitude, radius, int(bool(is_active))),
            )
            return int(cur.lastrowid)

    def update(self, location_id: int, *, fields: dict) -> bool:
        assignments = []
        params: list[object] = []
        for column in _UPDATABLE:
            if column in fields:
                assignments.append(f"{column}=%s")
                value = fields[column]
                params.append(int(bool(value)) if column == "is_active" else value)
        if not assignments:
            return self.get_by_id(location_id) is not None

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_locations SET {', '.join(assignments)} WHERE location_id=%s",
                tuple(params + [int(location_id)]),
            )
            if cur.rowcount > 0:
                return True
        # MySQL reports 0 affected rows when values are unchanged.
        return self.get_by_id(location_id) is not None

    def delete(self, location_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_locations WHERE location_id=%s", (int(location_id),))
            return cur.rowcount > 0
