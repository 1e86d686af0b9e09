"""Delete activity log entries past the retention window.

Meant for a daily cron job; prints how many entries were removed.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staffing_portal.staffing_portal.container import build_container
from src.staffing_portal.staffing_portal.core.constants import ACTIVITY_LOG_RETENTION_DAYS


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG), tz_name=getattr(settings, "TIMEZONE", None))

    removed = container.activity_service.purge_expired()
    print(f"OK: removed {removed} activity log entries older than {ACTIVITY_LOG_RETENTION_DAYS} days")


if __name__ == "__main__":
    main()
