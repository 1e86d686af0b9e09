from __future__ import annotations

from typing import Optional

from ..core.constants import SETTINGS_KEY
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import TimeSettings
from .repository import SettingsRepository


def _row_to_settings(r: dict) -> TimeSettings:
    return TimeSettings(
        check_in_start_hour=int(r["check_in_start_hour"]),
        check_in_end_hour=int(r["check_in_end_hour"]),
        check_out_start_hour=int(r["check_out_start_hour"]),
        updated_by=r.get("updated_by"),
        updated_at=r.get("updated_at"),
    )


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_or_create(self) -> TimeSettings:
        defaults = TimeSettings()
        with db_cursor(self._conn_factory) as (_, cur):
            # INSERT IGNORE keeps a concurrent first read from failing on the primary key.
            cur.execute(
                """
                INSERT IGNORE INTO attendance_settings(
                    setting_key, check_in_start_hour, check_in_end_hour, check_out_start_hour
                )
                VALUES(%s,%s,%s,%s)
                """,
                (
                    SETTINGS_KEY,
                    defaults.check_in_start_hour,
                    defaults.check_in_end_hour,
                    defaults.check_out_start_hour,
                ),
            )
            cur.execute(
                """
                SELECT check_in_start_hour, check_in_end_hour, check_out_start_hour, updated_by, updated_at
                FROM attendance_settings
                WHERE setting_key=%s
                """,
                (SETTINGS_KEY,),
            )
            return _row_to_settings(fetchone(cur))

    def save(
        self,
        *,
        check_in_start_hour: int,
        check_in_end_hour: int,
        check_out_start_hour: int,
        updated_by: Optional[int],
    ) -> TimeSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_settings(
                    setting_key, check_in_start_hour, check_in_end_hour, check_out_start_hour, updated_by
                )
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in_start_hour=VALUES(check_in_start_hour),
                    check_in_end_hour=VALUES(check_in_end_hour),
                    check_out_start_hour=VALUES(check_out_start_hour),
                    updated_by=VALUES(updated_by)
                """,
                (SETTINGS_KEY, check_in_start_hour, check_in_end_hour, check_out_start_hour, updated_by),
            )
        return self.get_or_create()
