from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceAction
from ...core.exceptions import TimeWindowError
from ...settings.model import TimeSettings


@dataclass(frozen=True)
class WindowDecision:
    allowed: bool
    reason: Optional[str] = None


class TimeWindowPolicy(ABC):
    """Strategy Pattern: one hour-window rule per attendance action.

    Comparisons use the current hour only (no minutes).
    """

    action: AttendanceAction

    @abstractmethod
    def is_open(self, *, hour: int, settings: TimeSettings) -> bool:
        raise NotImplementedError

    @abstractmethod
    def describe(self, settings: TimeSettings) -> str:
        raise NotImplementedError

    @abstractmethod
    def bounds(self, settings: TimeSettings) -> tuple[int, Optional[int]]:
        raise NotImplementedError

    def decide(self, *, hour: int, settings: TimeSettings) -> WindowDecision:
        if self.is_open(hour=hour, settings=settings):
            return WindowDecision(allowed=True)
        return WindowDecision(allowed=False, reason=self.describe(settings))

    def enforce(self, *, hour: int, settings: TimeSettings) -> None:
        decision = self.decide(hour=hour, settings=settings)
        if not decision.allowed:
            start, end = self.bounds(settings)
            raise TimeWindowError(decision.reason, action=self.action.value, start_hour=start, end_hour=end)
