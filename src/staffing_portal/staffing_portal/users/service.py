from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.enums import ADMIN_PANEL_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _parse_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


class UserService:
    """Use case: manage users (admin).

    Authentication itself happens outside this service; it only
    administers the accounts the attendance engine reads. Accounts are
    deactivated rather than deleted so their attendance history stays intact.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        current_role: Role,
        full_name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        role: Any = Role.EMPLOYEE.value,
    ) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can create accounts")

        full_name = require_non_empty(full_name, "Full name")
        email = require_email(email)
        require_min_length(password, "Password", 6)
        new_role = _parse_role(role)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")
        if new_role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created here")

        user_id = self._users.create_user(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=new_role,
        )
        logger.info("Created user id=%s role=%s", user_id, new_role.value)
        return self.get(user_id)

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self, *, current_role: Role, role: Any = None) -> Sequence[User]:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Unauthorized")
        return self._users.list_users(role=_parse_role(role) if role else None)

    def update_user(self, *, current_role: Role, user_id: int, changes: dict) -> User:
        """Change a user's role and/or active flag."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can update users")

        user = self.get(user_id)
        new_role = _parse_role(changes["role"]) if changes.get("role") is not None else None
        is_active = changes.get("isActive")
        if is_active is not None and not isinstance(is_active, bool):
            raise ValidationError("isActive must be true or false")

        if user.role == Role.ADMIN and (new_role not in (None, Role.ADMIN) or is_active is False):
            raise ValidationError("Admin accounts cannot be demoted or deactivated")
        if new_role == Role.ADMIN and user.role != Role.ADMIN:
            raise ValidationError("Admin role cannot be granted here")

        self._users.update_user(user.user_id, role=new_role, is_active=is_active)
        logger.info("Updated user id=%s role=%s is_active=%s", user.user_id, new_role, is_active)
        return self.get(user.user_id)
