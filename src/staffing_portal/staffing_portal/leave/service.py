from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..activity.service import ActivityLogService
from ..common.datetime_utils import now_local, parse_date_or_datetime
from ..common.pagination import clamp_page, pagination_meta
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import (
    ADMIN_LEAVE_PAGE_SIZE_DEFAULT,
    LEAVE_PAGE_SIZE_DEFAULT,
    LEAVE_PAGE_SIZE_MAX,
    LEAVE_REASON_MAX_LENGTH,
    LEAVE_REVIEW_NOTE_MAX_LENGTH,
)
from ..core.enums import (
    ADMIN_PANEL_ROLES,
    ATTENDANCE_ROLES,
    ActivityAction,
    ActivityEntity,
    LeaveStatus,
    LeaveType,
    Role,
)
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import LeaveRequest, LeaveStats, leave_days
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _optional_status(value: Any) -> Optional[LeaveStatus]:
    # Unknown filters are ignored rather than rejected.
    try:
        return LeaveStatus(value) if value else None
    except ValueError:
        return None


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_date_or_datetime(str(value))
    except ValueError:
        raise ValidationError("Invalid date format")


class LeaveService:
    """Use case: employees request leave, admins review it."""

    def __init__(
        self,
        leaves: LeaveRepository,
        activity: Optional[ActivityLogService] = None,
        *,
        tz_name: Optional[str] = None,
    ):
        self._leaves = leaves
        self._activity = activity
        self._tz_name = tz_name

    def create(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_type: Any,
        start_date: Any,
        end_date: Any,
        reason: Optional[str],
    ) -> LeaveRequest:
        if current_role not in ATTENDANCE_ROLES:
            raise AuthorizationError("Only employees can request leave")

        if not leave_type or not start_date or not end_date or not reason:
            raise ValidationError("All fields are required: leaveType, startDate, endDate, reason")

        try:
            kind = LeaveType(leave_type)
        except ValueError:
            raise ValidationError("Invalid leave type")

        start = _parse_date(start_date)
        end = _parse_date(end_date)
        if end < start:
            raise ValidationError("End date cannot be before start date")

        reason = require_non_empty(reason, "Reason")
        require_max_length(reason, "Reason", LEAVE_REASON_MAX_LENGTH)

        if self._leaves.find_overlapping(user_id=int(user_id), start_date=start, end_date=end):
            raise ValidationError("You already have a leave request for overlapping dates")

        request_id = self._leaves.create(
            user_id=int(user_id),
            leave_type=kind,
            start_date=start,
            end_date=end,
            reason=reason,
            total_days=leave_days(start, end),
        )
        logger.info("Leave request id=%s created by user_id=%s (%s to %s)", request_id, user_id, start, end)
        return self.get(request_id)

    def get(self, request_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(request_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave

    def list_mine(
        self,
        *,
        current_role: Role,
        user_id: int,
        status: Any = None,
        page: Any = 1,
        limit: Any = LEAVE_PAGE_SIZE_DEFAULT,
    ) -> dict:
        if current_role not in ATTENDANCE_ROLES:
            raise AuthorizationError("Access denied")

        page_n, limit_n = clamp_page(page, limit, default_limit=LEAVE_PAGE_SIZE_DEFAULT, max_limit=LEAVE_PAGE_SIZE_MAX)
        leaves, total = self._leaves.list_for_user(
            int(user_id),
            status=_optional_status(status),
            offset=(page_n - 1) * limit_n,
            limit=limit_n,
        )

        stats = self._leaves.stats_by_status(user_id=int(user_id))
        approved = stats.get(LeaveStatus.APPROVED, LeaveStats())
        return {
            "leaves": [leave.to_dict() for leave in leaves],
            "summary": {
                "pending": stats.get(LeaveStatus.PENDING, LeaveStats()).count,
                "approved": approved.count,
                "rejected": stats.get(LeaveStatus.REJECTED, LeaveStats()).count,
                "totalApprovedDays": approved.total_days,
            },
            "pagination": pagination_meta(total, page_n, limit_n),
        }

    def list_admin(
        self,
        *,
        current_role: Role,
        status: Any = None,
        user_id: Optional[int] = None,
        page: Any = 1,
        limit: Any = ADMIN_LEAVE_PAGE_SIZE_DEFAULT,
    ) -> dict:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Admin access required")

        page_n, limit_n = clamp_page(
            page, limit, default_limit=ADMIN_LEAVE_PAGE_SIZE_DEFAULT, max_limit=ADMIN_LEAVE_PAGE_SIZE_DEFAULT
        )
        rows, total = self._leaves.list_all(
            status=_optional_status(status),
            user_id=user_id,
            offset=(page_n - 1) * limit_n,
            limit=limit_n,
        )
        stats = self._leaves.stats_by_status()
        return {
            "leaves": [row.to_dict() for row in rows],
            "summary": {s.value: stats.get(s, LeaveStats()).count for s in LeaveStatus},
            "pagination": pagination_meta(total, page_n, limit_n),
        }

    def review(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        status: Any,
        review_note: Optional[str] = None,
    ) -> LeaveRequest:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Admin access required")

        if status not in (LeaveStatus.APPROVED.value, LeaveStatus.REJECTED.value):
            raise ValidationError("Status must be either approved or rejected")
        decision = LeaveStatus(status)

        note = str(review_note).strip() or None if review_note else None
        require_max_length(note, "Review note", LEAVE_REVIEW_NOTE_MAX_LENGTH)

        leave = self.get(request_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Only pending leave requests can be reviewed")

        ok = self._leaves.review(
            leave.request_id,
            status=decision,
            reviewed_by=int(admin_user_id),
            reviewed_at=now_local(self._tz_name),
            review_note=note,
        )
        if not ok:
            # Lost a race with another reviewer.
            raise ValidationError("Only pending leave requests can be reviewed")

        logger.info("Leave request id=%s %s by user_id=%s", leave.request_id, decision.value, admin_user_id)
        if self._activity is not None:
            self._activity.record(
                actor_id=admin_user_id,
                actor_role=current_role,
                action=ActivityAction.UPDATED,
                entity_type=ActivityEntity.ATTENDANCE,
                entity_id=leave.request_id,
                entity_name="Leave Request",
                description=f"{decision.value.capitalize()} leave request",
                metadata={"status": decision.value, "reviewNote": note},
            )
        return self.get(leave.request_id)

    def delete(self, *, current_role: Role, request_id: int) -> None:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Admin access required")
        if not self._leaves.delete(int(request_id)):
            raise NotFoundError("Leave request not found")
        logger.info("Leave request id=%s deleted", request_id)
