from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date_or_datetime(value: str) -> date:
    """Parse YYYY-MM-DD, or an ISO datetime such as ``2026-03-02T00:00:00.000Z``.

    For datetimes the calendar date as written is kept; no zone conversion.
    """
    text = value.strip()
    if len(text) > 10 and text[10] in "T ":
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    return parse_iso_date(text)


def parse_local_datetime(value: str, tz_name: Optional[str] = None) -> datetime:
    """Parse an ISO datetime into a naive wall-clock time in ``tz_name``.

    Offsets (including a trailing ``Z``) are converted; naive input is taken as local.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed
    local = parsed.astimezone(ZoneInfo(tz_name)) if tz_name else parsed.astimezone()
    return local.replace(tzinfo=None)


def now_local(tz_name: Optional[str] = None) -> datetime:
    """Current wall-clock time, naive, in ``tz_name`` (server local time when omitted).

    Note: Wrapped so tests can patch/mocked easier.
    """
    if not tz_name:
        return datetime.now()
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def format_hour(hour: int) -> str:
    """Render an hour as ``07:00 PM``."""
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display:02d}:00 {suffix}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if month < 1 or month > 12:
        raise ValueError(f"Invalid month: {month}")
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end - timedelta(days=1)
