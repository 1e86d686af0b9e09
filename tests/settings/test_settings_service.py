import pytest

from src.staffing_portal.staffing_portal.core.enums import Role
from src.staffing_portal.staffing_portal.core.exceptions import AuthorizationError, ValidationError


def test_defaults_created_on_first_read(container):
    settings = container.settings_service.current()
    assert (settings.check_in_start_hour, settings.check_in_end_hour, settings.check_out_start_hour) == (10, 11, 19)


def test_employees_can_read_but_plain_users_cannot(container):
    assert container.settings_service.get_for(current_role=Role.EMPLOYEE).check_in_start_hour == 10
    with pytest.raises(AuthorizationError):
        container.settings_service.get_for(current_role=Role.USER)


def test_partial_update_keeps_other_hours(container, settings_repo):
    saved = container.settings_service.update(current_role=Role.ADMIN, admin_user_id=1, check_out_start_hour=18)

    assert saved.check_out_start_hour == 18
    assert saved.check_in_start_hour == 10
    assert saved.updated_by == 1
    assert settings_repo.settings == saved


@pytest.mark.parametrize("value", [24, -1, "10", 10.5, True])
def test_hour_must_be_int_in_range(container, value):
    with pytest.raises(ValidationError):
        container.settings_service.update(current_role=Role.ADMIN, admin_user_id=1, check_in_start_hour=value)


def test_start_must_precede_end(container):
    with pytest.raises(ValidationError, match="before check-in end"):
        container.settings_service.update(current_role=Role.ADMIN, admin_user_id=1, check_in_start_hour=11)


def test_only_admin_panel_roles_update(container):
    with pytest.raises(AuthorizationError):
        container.settings_service.update(current_role=Role.EMPLOYEE, admin_user_id=2, check_in_start_hour=9)
    assert container.settings_service.update(
        current_role=Role.SUB_ADMIN, admin_user_id=3, check_in_start_hour=9
    ).check_in_start_hour == 9
