"""JSON helpers shared by the controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Iterable, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Unauthorized", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(roles: Iterable[Role], message: str = "Access denied"):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Unauthorized", 401)
            if current_role() not in allowed:
                return json_error(message, 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def error_response(e: Exception, fallback: str):
    """Map a service exception to a JSON response; unexpected errors are logged."""
    if isinstance(e, ValidationError):
        return json_error(str(e), 400)
    if isinstance(e, AuthenticationError):
        return json_error(str(e), 401)
    if isinstance(e, AuthorizationError):
        return json_error(str(e), 403)
    if isinstance(e, NotFoundError):
        return json_error(str(e), 404)
    if isinstance(e, DomainError):
        return json_error(str(e), 400)
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return json_error(fallback, 500)


def query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")
