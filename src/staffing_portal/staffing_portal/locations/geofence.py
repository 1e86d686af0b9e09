"""Great-circle distance and nearest-location matching."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import ConfigurationError, OutOfRangeError
from .model import AllowedLocation, GeoPoint


@dataclass(frozen=True)
class NearestLocation:
    location: AllowedLocation
    distance: float

    @property
    def in_range(self) -> bool:
        return is_within_radius(self.distance, self.location)

    @property
    def shortfall(self) -> float:
        """Meters beyond the radius; zero or negative when in range."""
        return self.distance - self.location.radius


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points, in meters.

    Inputs are trusted: range and NaN checks happen at the request boundary.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def find_nearest(point: GeoPoint, locations: Sequence[AllowedLocation]) -> NearestLocation:
    """Closest location to ``point``; ties keep the first one in input order."""
    if not locations:
        raise ConfigurationError("No attendance locations are configured. Please contact an administrator.")

    nearest = None
    nearest_distance = math.inf
    for location in locations:
        d = distance_meters(point, location.center)
        if d < nearest_distance:
            nearest = location
            nearest_distance = d

    if nearest is None:
        # Only reachable when every distance is NaN.
        raise ConfigurationError("No eligible attendance location could be matched.")
    return NearestLocation(location=nearest, distance=nearest_distance)


def is_within_radius(distance: float, location: AllowedLocation) -> bool:
    return distance <= location.radius


def require_in_range(point: GeoPoint, locations: Sequence[AllowedLocation]) -> NearestLocation:
    """Nearest location, or OutOfRangeError carrying the exact distance and radius."""
    nearest = find_nearest(point, locations)
    if not nearest.in_range:
        raise OutOfRangeError(
            "You are not within any allowed attendance location",
            location_name=nearest.location.name,
            distance=nearest.distance,
            required_radius=nearest.location.radius,
        )
    return nearest
