import pytest

from src.staffing_portal.staffing_portal.attendance.factory import TimeWindowPolicyFactory, is_action_allowed
from src.staffing_portal.staffing_portal.attendance.policies.check_in_policy import CheckInWindowPolicy
from src.staffing_portal.staffing_portal.attendance.policies.check_out_policy import CheckOutWindowPolicy
from src.staffing_portal.staffing_portal.core.enums import AttendanceAction
from src.staffing_portal.staffing_portal.core.exceptions import TimeWindowError
from src.staffing_portal.staffing_portal.settings.model import TimeSettings

SETTINGS = TimeSettings(check_in_start_hour=10, check_in_end_hour=11, check_out_start_hour=19)


def test_factory_picks_policy_per_action():
    factory = TimeWindowPolicyFactory()
    assert isinstance(factory.for_action(AttendanceAction.CHECK_IN), CheckInWindowPolicy)
    assert isinstance(factory.for_action(AttendanceAction.CHECK_OUT), CheckOutWindowPolicy)


@pytest.mark.parametrize("hour, allowed", [(9, False), (10, True), (11, False)])
def test_check_in_window_is_half_open(hour, allowed):
    assert is_action_allowed(AttendanceAction.CHECK_IN, hour, SETTINGS).allowed is allowed


@pytest.mark.parametrize("hour, allowed", [(18, False), (19, True), (23, True)])
def test_check_out_has_no_upper_bound(hour, allowed):
    assert is_action_allowed(AttendanceAction.CHECK_OUT, hour, SETTINGS).allowed is allowed


def test_rejection_reason_describes_the_window():
    decision = is_action_allowed(AttendanceAction.CHECK_IN, 9, SETTINGS)
    assert decision.reason == "Check-in is only allowed between 10:00 AM and 11:00 AM."

    decision = is_action_allowed(AttendanceAction.CHECK_OUT, 18, SETTINGS)
    assert decision.reason == "Check-out is only allowed after 07:00 PM."


def test_enforce_raises_with_window_bounds():
    with pytest.raises(TimeWindowError) as exc:
        CheckOutWindowPolicy().enforce(hour=12, settings=SETTINGS)

    payload = exc.value.to_payload()
    assert payload["errorCode"] == "TIME_WINDOW"
    assert payload["allowedWindow"] == {"action": "check-out", "startHour": 19, "endHour": None}


def test_empty_check_in_window_rejects_every_hour():
    settings = TimeSettings(check_in_start_hour=12, check_in_end_hour=12, check_out_start_hour=19)
    assert not any(is_action_allowed(AttendanceAction.CHECK_IN, h, settings).allowed for h in range(24))
