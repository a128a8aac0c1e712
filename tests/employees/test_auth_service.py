import pytest

from field_tracker.core.exceptions import AuthenticationError
from field_tracker.employees.service import INVALID_CREDENTIALS, AuthService


@pytest.fixture
def auth(employees):
    return AuthService(employees)


def test_login_with_correct_pin_returns_profile(auth):
    profile = auth.login(1, "1234")

    assert profile.employee_id == 1
    assert profile.name == "Test Employee"
    assert profile.email == "test@example.com"


@pytest.mark.parametrize(
    "employee_id,pin",
    [
        (1, "9999"),  # wrong pin
        (999, "1234"),  # unknown employee
        (3, "1111"),  # inactive employee
        (4, ""),  # no pin configured
        (4, "None"),
    ],
)
def test_every_login_failure_has_the_same_message(auth, employee_id, pin):
    with pytest.raises(AuthenticationError) as exc:
        auth.login(employee_id, pin)

    assert str(exc.value) == INVALID_CREDENTIALS


def test_pin_comparison_is_exact_text(auth):
    with pytest.raises(AuthenticationError):
        auth.login(1, "1234 ")
