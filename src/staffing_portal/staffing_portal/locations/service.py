from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import require_float, require_latitude, require_longitude, require_non_empty
from ..core.constants import DEFAULT_LOCATION_RADIUS, MAX_LOCATION_RADIUS, MIN_LOCATION_RADIUS
from ..core.enums import ADMIN_PANEL_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import AllowedLocation
from .repository import LocationRepository

logger = logging.getLogger(__name__)


def _require_radius(value: Any) -> float:
    radius = require_float(value, "Radius")
    if radius < MIN_LOCATION_RADIUS:
        raise ValidationError(f"Radius must be at least {MIN_LOCATION_RADIUS} meters")
    if radius > MAX_LOCATION_RADIUS:
        raise ValidationError(f"Radius cannot exceed {MAX_LOCATION_RADIUS} meters")
    return radius


class LocationService:
    """Use case: admins manage the geofences the attendance engine reads."""

    def __init__(self, locations: LocationRepository):
        self._locations = locations

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role not in ADMIN_PANEL_ROLES:
            raise AuthorizationError("Unauthorized")

    def list_all(self, *, current_role: Role) -> Sequence[AllowedLocation]:
        self._require_admin(current_role)
        return self._locations.list_all()

    def list_active(self) -> Sequence[AllowedLocation]:
        return self._locations.list_active()

    def get(self, location_id: int) -> AllowedLocation:
        location = self._locations.get_by_id(int(location_id))
        if not location:
            raise NotFoundError("Location not found")
        return location

    def create(
        self,
        *,
        current_role: Role,
        name: Optional[str],
        address: Optional[str],
        latitude: Any,
        longitude: Any,
        radius: Any = None,
    ) -> AllowedLocation:
        self._require_admin(current_role)

        if not name or not address or latitude is None or longitude is None:
            raise ValidationError("Name, address, latitude, and longitude are required")

        location_id = self._locations.create(
            name=require_non_empty(name, "Name"),
            address=require_non_empty(address, "Address"),
            latitude=require_latitude(latitude),
            longitude=require_longitude(longitude),
            radius=_require_radius(radius) if radius not in (None, "", 0) else float(DEFAULT_LOCATION_RADIUS),
            is_active=True,
        )
        logger.info("Created attendance location id=%s name=%r", location_id, name)
        return self.get(location_id)

    def update(self, *, current_role: Role, location_id: int, changes: dict) -> AllowedLocation:
        self._require_admin(current_role)

        fields: dict[str, object] = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "Name")
        if "address" in changes:
            fields["address"] = require_non_empty(changes["address"], "Address")
        if changes.get("latitude") not in (None, ""):
            fields["latitude"] = require_latitude(changes["latitude"])
        if changes.get("longitude") not in (None, ""):
            fields["longitude"] = require_longitude(changes["longitude"])
        if "radius" in changes:
            fields["radius"] = _require_radius(changes["radius"])
        is_active = changes.get("isActive", changes.get("is_active"))
        if is_active is not None:
            if not isinstance(is_active, bool):
                raise ValidationError("isActive must be true or false")
            fields["is_active"] = is_active

        if not self._locations.update(int(location_id), fields=fields):
            raise NotFoundError("Location not found")
        logger.info("Updated attendance location id=%s fields=%s", location_id, sorted(fields))
        return self.get(location_id)

    def delete(self, *, current_role: Role, location_id: int) -> None:
        self._require_admin(current_role)
        # Historical attendance keeps its own snapshot of the location.
        if not self._locations.delete(int(location_id)):
            raise NotFoundError("Location not found")
        logger.info("Deleted attendance location id=%s", location_id)
