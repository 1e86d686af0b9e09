from __future__ import annotations

from .base import WorkedTimeCalculator
from ...attendance.model import AttendanceRecord


class CompletedDayCalculator(WorkedTimeCalculator):
    """Only checked-out days count; open or missed checkouts contribute 0."""

    def worked_minutes(self, record: AttendanceRecord) -> int:
        if record.work_hours is None:
            return 0
        return max(int(round(record.work_hours * 60)), 0)
