from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import (
    DEFAULT_CHECK_IN_END_HOUR,
    DEFAULT_CHECK_IN_START_HOUR,
    DEFAULT_CHECK_OUT_START_HOUR,
)


@dataclass(frozen=True)
class TimeSettings:
    """Hour windows for marking attendance (0-23, wall-clock hours)."""

    check_in_start_hour: int = DEFAULT_CHECK_IN_START_HOUR
    check_in_end_hour: int = DEFAULT_CHECK_IN_END_HOUR
    check_out_start_hour: int = DEFAULT_CHECK_OUT_START_HOUR
    updated_by: Optional[int] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "checkInStartHour": self.check_in_start_hour,
            "checkInEndHour": self.check_in_end_hour,
            "checkOutStartHour": self.check_out_start_hour,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
