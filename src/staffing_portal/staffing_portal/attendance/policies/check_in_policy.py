from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import format_hour
from ...core.enums import AttendanceAction
from ...settings.model import TimeSettings
from .base import TimeWindowPolicy


class CheckInWindowPolicy(TimeWindowPolicy):
    """Check-in is open for ``start <= hour < end``."""

    action = AttendanceAction.CHECK_IN

    def is_open(self, *, hour: int, settings: TimeSettings) -> bool:
        return settings.check_in_start_hour <= hour < settings.check_in_end_hour

    def describe(self, settings: TimeSettings) -> str:
        return (
            f"Check-in is only allowed between {format_hour(settings.check_in_start_hour)} "
            f"and {format_hour(settings.check_in_end_hour)}."
        )

    def bounds(self, settings: TimeSettings) -> tuple[int, Optional[int]]:
        return settings.check_in_start_hour, settings.check_in_end_hour
