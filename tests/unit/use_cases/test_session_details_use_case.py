from datetime import timedelta

import pytest

from src.app.use_cases.sessions import GetSessionDetailsUseCase
from src.domain.entities import (
    CenterAssignment,
    CenterRole,
    HospitalCenter,
    User,
    UserSession,
)


@pytest.fixture
def live_uow(mock_uow, clock):
    alpha = HospitalCenter(id=1, name="Alpha Clinic")
    beta = HospitalCenter(id=2, name="Beta Clinic")
    staff = CenterAssignment(
        user_id=4, hospital_center_id=1, role=CenterRole.medical_staff, is_active=True
    )
    admin = CenterAssignment(
        user_id=4, hospital_center_id=2, role=CenterRole.super_admin, is_active=True
    )
    mock_uow.sessions.get_by_token.return_value = UserSession(
        id=3,
        session_token="tok-abc",
        user_id=4,
        current_hospital_center_id=1,
        login_time=clock.now(),
        expires_at=clock.now() + timedelta(hours=12),
        is_active=True,
    )
    mock_uow.users.get_by_id.return_value = User(
        id=4, email="doc@clinic.org", first_name="Ada", last_name="Lee", is_active=True
    )
    mock_uow.assignments.get.return_value = staff
    mock_uow.centers.get_by_id.return_value = alpha
    mock_uow.assignments.get_active_with_centers.return_value = [
        (staff, alpha),
        (admin, beta),
    ]
    mock_uow.last_selected.get.return_value = None
    return mock_uow


@pytest.mark.asyncio
async def test_session_details(live_uow, services):
    result = await GetSessionDetailsUseCase(live_uow, services).execute("tok-abc")

    assert result.is_ok()
    details = result.value
    assert details.session.session_id == 3
    assert details.session.current_role == "MedicalStaff"
    assert details.user.full_name == "Ada Lee"
    assert details.current_center.center_name == "Alpha Clinic"
    assert [c.center_id for c in details.accessible_centers] == [1, 2]


@pytest.mark.asyncio
async def test_session_details_unknown_token(mock_uow, services):
    result = await GetSessionDetailsUseCase(mock_uow, services).execute("missing")

    assert result.error.code == "SESSION_NOT_FOUND"
    mock_uow.assignments.get_active_with_centers.assert_not_awaited()


@pytest.mark.asyncio
async def test_session_details_of_deactivated_owner(live_uow, services):
    live_uow.users.get_by_id.return_value = User(id=4, email="doc@clinic.org", is_active=False)

    result = await GetSessionDetailsUseCase(live_uow, services).execute("tok-abc")

    assert result.error.code == "ACCOUNT_INACTIVE"
