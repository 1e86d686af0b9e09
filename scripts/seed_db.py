"""Seed the attendance settings, the Head Office geofence and demo accounts.

Prints the resulting check-in/check-out window and the active locations so
a fresh install can be checked at a glance before employees start marking.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staffing_portal.staffing_portal.common.datetime_utils import format_hour
from src.staffing_portal.staffing_portal.container import build_container
from src.staffing_portal.staffing_portal.database.bootstrap import apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    container = build_container(db_config=db_config, tz_name=getattr(settings, "TIMEZONE", None))
    window = container.settings_repo.get_or_create()
    print(
        f"OK: seeded {db_config.get('database')} | check-in {format_hour(window.check_in_start_hour)}"
        f" to {format_hour(window.check_in_end_hour)}, check-out from {format_hour(window.check_out_start_hour)}"
    )
    for loc in container.locations_repo.list_active():
        print(f"  location #{loc.location_id} {loc.name} ({loc.latitude}, {loc.longitude}) r={loc.radius:g}m")


if __name__ == "__main__":
    main()
