import pytest

from src.staffing_portal.staffing_portal.attendance.service import MarkRequest
from src.staffing_portal.staffing_portal.core.enums import Role
from src.staffing_portal.staffing_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _create(service, **overrides):
    data = dict(name="Branch", address="2 Side Road", latitude=12.97, longitude=77.59)
    data.update(overrides)
    return service.create(current_role=Role.ADMIN, **data)


def test_create_defaults_radius_to_100(container):
    loc = _create(container.location_service)
    assert loc.radius == 100.0
    assert loc.is_active


def test_create_requires_fields(container):
    with pytest.raises(ValidationError, match="required"):
        _create(container.location_service, address="")


@pytest.mark.parametrize("radius", [5, 6000, "wide"])
def test_radius_bounds(container, radius):
    with pytest.raises(ValidationError):
        _create(container.location_service, radius=radius)


@pytest.mark.parametrize("lat, lng", [(91, 0), (0, 181), ("x", 0)])
def test_coordinates_are_validated(container, lat, lng):
    with pytest.raises(ValidationError):
        _create(container.location_service, latitude=lat, longitude=lng)


def test_employees_cannot_manage_locations(container):
    with pytest.raises(AuthorizationError):
        container.location_service.create(
            current_role=Role.EMPLOYEE, name="X", address="Y", latitude=0, longitude=0
        )
    with pytest.raises(AuthorizationError):
        container.location_service.list_all(current_role=Role.EMPLOYEE)


def test_deactivate_removes_location_from_active_list(container):
    service = container.location_service
    updated = service.update(current_role=Role.ADMIN, location_id=1, changes={"isActive": False})

    assert updated.is_active is False
    assert service.list_active() == []
    assert len(service.list_all(current_role=Role.SUB_ADMIN)) == 1


def test_is_active_must_be_boolean(container):
    with pytest.raises(ValidationError):
        container.location_service.update(current_role=Role.ADMIN, location_id=1, changes={"isActive": "no"})


def test_update_and_delete_unknown_location(container):
    with pytest.raises(NotFoundError):
        container.location_service.update(current_role=Role.ADMIN, location_id=99, changes={"name": "X"})
    with pytest.raises(NotFoundError):
        container.location_service.delete(current_role=Role.ADMIN, location_id=99)


def test_deleting_location_keeps_attendance_snapshot(container, attendance_repo, fixed_now):
    container.attendance_service.mark(
        2,
        MarkRequest.from_payload({"action": "check-in", "latitude": 0.0, "longitude": 0.0}),
        current_role=Role.EMPLOYEE,
        now=fixed_now,
    )
    container.location_service.delete(current_role=Role.ADMIN, location_id=1)

    rec = attendance_repo.get_for_user_and_date(2, fixed_now.date())
    assert rec.check_in_location.name == "Head Office"
