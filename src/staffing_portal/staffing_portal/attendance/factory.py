from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceAction
from ..settings.model import TimeSettings
from .policies.base import TimeWindowPolicy, WindowDecision
from .policies.check_in_policy import CheckInWindowPolicy
from .policies.check_out_policy import CheckOutWindowPolicy


@dataclass
class TimeWindowPolicyFactory:
    """Factory Pattern: choose the hour-window policy for an action."""

    def for_action(self, action: AttendanceAction) -> TimeWindowPolicy:
        if action == AttendanceAction.CHECK_IN:
            return CheckInWindowPolicy()
        if action == AttendanceAction.CHECK_OUT:
            return CheckOutWindowPolicy()
        raise ValueError(f"Unsupported attendance action: {action!r}")


def is_action_allowed(action: AttendanceAction, hour: int, settings: TimeSettings) -> WindowDecision:
    return TimeWindowPolicyFactory().for_action(action).decide(hour=hour, settings=settings)
