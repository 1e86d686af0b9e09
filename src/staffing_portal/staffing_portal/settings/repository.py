from __future__ import annotations

from typing import Optional, Protocol

from .model import TimeSettings


class SettingsRepository(Protocol):
    def get_or_create(self) -> TimeSettings:
        """Return the single settings row, creating it with defaults when missing."""

        raise NotImplementedError

    def save(
        self,
        *,
        check_in_start_hour: int,
        check_in_end_hour: int,
        check_out_start_hour: int,
        updated_by: Optional[int],
    ) -> TimeSettings:
        raise NotImplementedError
