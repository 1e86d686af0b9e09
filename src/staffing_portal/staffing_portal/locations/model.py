from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class AllowedLocation:
    """Geofence managed by admins: a named center plus a radius in meters."""

    location_id: int
    name: str
    address: str
    latitude: float
    longitude: float
    radius: float
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    def to_dict(self) -> dict:
        return {
            "id": self.location_id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius": self.radius,
            "isActive": self.is_active,
        }
