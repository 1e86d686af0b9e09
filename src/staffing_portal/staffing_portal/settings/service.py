from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import require_hour
from ..core.enums import ADMIN_PANEL_ROLES, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import TimeSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

_READ_ROLES = ADMIN_PANEL_ROLES | {Role.EMPLOYEE}


class SettingsService:
    """Use case: read and update attendance time windows."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def current(self) -> TimeSettings:
        return self._settings.get_or_create()

    def get_for(self, *, current_role: Role) -> TimeSettings:
        if current_role not in _READ_ROLES:
            raise AuthorizationError("Access denied")
        return self.current()

    def update(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        check_in_start_hour: Any = None,
        check_in_end_hour: Any = None,
        check_out_start_hour: Any = None,
    ) -> TimeSettings:
        """Partial update: omitted hours keep their stored value."""
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Only admins can update settings")

        start = self._optional_hour(check_in_start_hour, "Check-in start hour")
        end = self._optional_hour(check_in_end_hour, "Check-in end hour")
        out = self._optional_hour(check_out_start_hour, "Check-out start hour")

        existing = self.current()
        new_start = existing.check_in_start_hour if start is None else start
        new_end = existing.check_in_end_hour if end is None else end
        new_out = existing.check_out_start_hour if out is None else out

        if new_start >= new_end:
            raise ValidationError("Check-in start must be before check-in end")

        saved = self._settings.save(
            check_in_start_hour=new_start,
            check_in_end_hour=new_end,
            check_out_start_hour=new_out,
            updated_by=int(admin_user_id),
        )
        logger.info(
            "Attendance settings updated by user_id=%s: check-in [%s, %s), check-out from %s",
            admin_user_id,
            new_start,
            new_end,
            new_out,
        )
        return saved

    @staticmethod
    def _optional_hour(value: Any, field_name: str) -> Optional[int]:
        if value is None:
            return None
        return require_hour(value, field_name)
