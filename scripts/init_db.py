"""Create the staffing portal tables.

Applies ``database/schema.sql`` to the database named by the active
``APP_ENV`` settings and exits non-zero if any portal table is missing
afterwards. Safe to run repeatedly.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staffing_portal.staffing_portal.database.bootstrap import apply_schema, list_tables

PORTAL_TABLES = (
    "users",
    "attendance_locations",
    "attendance_settings",
    "attendance_records",
    "leave_requests",
    "announcements",
    "activity_logs",
)


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")

    tables = set(list_tables(db_config))
    missing = [t for t in PORTAL_TABLES if t not in tables]
    if missing:
        print(f"FAILED: {target} is missing {', '.join(missing)}", file=sys.stderr)
        return 1
    print(f"OK: schema ready on {target} ({len(PORTAL_TABLES)} portal tables)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
