import pytest

from src.app.use_cases.auth.login_use_case import LoginUseCase
from src.domain.entities import (
    CenterAssignment,
    CenterRole,
    HospitalCenter,
    User,
    UserLastSelectedCenter,
)


def _persist(session_obj):
    session_obj.id = 42
    return session_obj


@pytest.fixture
def user(password_policy):
    return User(
        id=1,
        email="a@x.com",
        first_name="Ann",
        last_name="Lee",
        password_hash=password_policy.hash("Secret1!"),
        is_active=True,
    )


@pytest.fixture
def two_centers():
    return [
        (
            CenterAssignment(user_id=1, hospital_center_id=1, role=CenterRole.medical_staff),
            HospitalCenter(id=1, name="Alpha Clinic"),
        ),
        (
            CenterAssignment(user_id=1, hospital_center_id=2, role=CenterRole.super_admin),
            HospitalCenter(id=2, name="Beta Hospital"),
        ),
    ]


@pytest.fixture
def ready_uow(mock_uow, user, two_centers):
    mock_uow.users.get_by_email.return_value = user
    mock_uow.assignments.get_active_with_centers.return_value = two_centers
    mock_uow.sessions.create.side_effect = _persist
    return mock_uow


@pytest.mark.asyncio
async def test_successful_login_opens_session_on_first_center(ready_uow, services, audit_sink, clock):
    """No requested and no remembered center: first accessible center by name"""
    # Act
    result = await LoginUseCase(ready_uow, services).execute(
        "a@x.com", "Secret1!", ip_address="10.0.0.1", user_agent="pytest"
    )

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.session_id == 42
    assert len(response.session_token) >= 43
    assert response.expires_at == clock.now() + services.session_lifetime
    assert response.current_center.center_id == 1
    assert response.current_center.role == "MedicalStaff"
    assert [c.center_id for c in response.accessible_centers] == [1, 2]
    assert response.requires_password_change is False

    created = ready_uow.sessions.create.call_args.args[0]
    assert created.current_hospital_center_id == 1
    assert created.ip_address == "10.0.0.1"
    ready_uow.last_selected.upsert.assert_awaited_once_with(1, 1, clock.now())
    ready_uow.commit.assert_awaited_once()
    assert ready_uow.users.get_by_email.return_value.last_login_at == clock.now()

    events = audit_sink.of_type("login")
    assert len(events) == 1
    assert events[0]["success"] is True
    assert events[0]["center_id"] == 1


@pytest.mark.asyncio
async def test_login_defaults_to_last_selected_center(ready_uow, services):
    ready_uow.last_selected.get.return_value = UserLastSelectedCenter(
        user_id=1, last_selected_hospital_center_id=2
    )

    result = await LoginUseCase(ready_uow, services).execute("a@x.com", "Secret1!")

    assert result.is_ok()
    assert result.value.current_center.center_id == 2
    assert result.value.current_center.role == "SuperAdmin"
    assert result.value.current_center.is_last_selected is True


@pytest.mark.asyncio
async def test_login_to_requested_center(ready_uow, services):
    result = await LoginUseCase(ready_uow, services).execute(
        "a@x.com", "Secret1!", center_id=2
    )

    assert result.is_ok()
    assert result.value.current_center.center_id == 2


@pytest.mark.asyncio
async def test_login_to_unassigned_center_is_unauthorized(ready_uow, services):
    result = await LoginUseCase(ready_uow, services).execute(
        "a@x.com", "Secret1!", center_id=3
    )

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
    ready_uow.sessions.create.assert_not_awaited()
    ready_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_email(mock_uow, services, audit_sink):
    result = await LoginUseCase(mock_uow, services).execute("nobody@x.com", "Secret1!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid email or password"
    events = audit_sink.of_type("login")
    assert events[0]["success"] is False
    assert events[0]["failure_reason"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_wrong_password(ready_uow, services):
    result = await LoginUseCase(ready_uow, services).execute("a@x.com", "Wrong1!x")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    ready_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["Secret1!", "Wrong1!x"])
async def test_inactive_account_reported_before_password(ready_uow, user, services, password):
    user.is_active = False

    result = await LoginUseCase(ready_uow, services).execute("a@x.com", password)

    assert result.is_err()
    assert result.error.code == "ACCOUNT_INACTIVE"
    assert result.error.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_no_assignments(ready_uow, user, services):
    ready_uow.assignments.get_active_with_centers.return_value = []

    result = await LoginUseCase(ready_uow, services).execute("a@x.com", "Secret1!")

    assert result.is_err()
    assert result.error.code == "NO_ASSIGNMENTS"
    assert user.last_login_at is None
    ready_uow.sessions.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_flagged_account_must_change_password(ready_uow, user, services):
    user.must_change_password = True

    result = await LoginUseCase(ready_uow, services).execute("a@x.com", "Secret1!")

    assert result.is_ok()
    assert result.value.requires_password_change is True
    assert result.value.user.must_change_password is True
