from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import format_hour
from ...core.enums import AttendanceAction
from ...settings.model import TimeSettings
from .base import TimeWindowPolicy


class CheckOutWindowPolicy(TimeWindowPolicy):
    """Check-out is open from ``check_out_start_hour`` until midnight."""

    action = AttendanceAction.CHECK_OUT

    def is_open(self, *, hour: int, settings: TimeSettings) -> bool:
        return hour >= settings.check_out_start_hour

    def describe(self, settings: TimeSettings) -> str:
        return f"Check-out is only allowed after {format_hour(settings.check_out_start_hour)}."

    def bounds(self, settings: TimeSettings) -> tuple[int, Optional[int]]:
        return settings.check_out_start_hour, None
