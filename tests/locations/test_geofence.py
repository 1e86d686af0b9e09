import math

import pytest

from src.staffing_portal.staffing_portal.core.constants import EARTH_RADIUS_METERS
from src.staffing_portal.staffing_portal.core.exceptions import ConfigurationError, OutOfRangeError
from src.staffing_portal.staffing_portal.locations.geofence import (
    distance_meters,
    find_nearest,
    is_within_radius,
    require_in_range,
)
from src.staffing_portal.staffing_portal.locations.model import AllowedLocation, GeoPoint

# Degrees of latitude spanning 150 m along a meridian.
LAT_150M = 150 / (EARTH_RADIUS_METERS * math.pi / 180)


def _loc(location_id, lat, lng, radius=100.0, name=None):
    return AllowedLocation(location_id, name or f"Site {location_id}", "addr", lat, lng, radius)


def test_distance_to_self_is_zero():
    p = GeoPoint(28.6315, 77.2167)
    assert distance_meters(p, p) == 0


def test_distance_is_symmetric():
    a = GeoPoint(28.6315, 77.2167)
    b = GeoPoint(19.0760, 72.8777)
    assert distance_meters(a, b) == pytest.approx(distance_meters(b, a))


def test_distance_delhi_to_mumbai_is_about_1150_km():
    d = distance_meters(GeoPoint(28.6139, 77.2090), GeoPoint(19.0760, 72.8777))
    assert d == pytest.approx(1_150_000, rel=0.01)


def test_user_at_center_is_in_range():
    nearest = require_in_range(GeoPoint(0.0, 0.0), [_loc(1, 0.0, 0.0)])
    assert nearest.distance == 0
    assert nearest.in_range


def test_user_150m_away_reports_exact_shortfall():
    with pytest.raises(OutOfRangeError) as exc:
        require_in_range(GeoPoint(LAT_150M, 0.0), [_loc(1, 0.0, 0.0, name="Head Office")])

    err = exc.value
    assert err.location_name == "Head Office"
    assert err.required_radius == 100.0
    assert err.distance == pytest.approx(150.0, abs=1e-6)
    assert err.shortfall == pytest.approx(50.0, abs=1e-6)

    payload = err.to_payload()
    assert payload["errorCode"] == "OUT_OF_RANGE"
    assert payload["nearestLocation"]["shortfall"] == err.shortfall


def test_radius_boundary_is_inclusive():
    loc = _loc(1, 0.0, 0.0, radius=100.0)
    assert is_within_radius(100.0, loc)
    assert not is_within_radius(100.0001, loc)


def test_nearest_wins_over_input_order():
    far = _loc(1, 1.0, 1.0)
    near = _loc(2, 0.0, 0.0)
    assert find_nearest(GeoPoint(0.0001, 0.0), [far, near]).location is near


def test_tie_keeps_first_location():
    a = _loc(1, 0.001, 0.0)
    b = _loc(2, -0.001, 0.0)
    assert find_nearest(GeoPoint(0.0, 0.0), [a, b]).location is a
    assert find_nearest(GeoPoint(0.0, 0.0), [b, a]).location is b


def test_no_locations_is_a_configuration_error_not_out_of_range():
    with pytest.raises(ConfigurationError):
        find_nearest(GeoPoint(0.0, 0.0), [])
