from datetime import timedelta

import pytest

from src.app.services.session_store import SessionStore
from src.app.use_cases.sessions import ExtendSessionUseCase
from src.domain.entities import (
    CenterAssignment,
    CenterRole,
    HospitalCenter,
    User,
    UserSession,
)


@pytest.fixture
def live_uow(mock_uow, clock):
    session = UserSession(
        id=3,
        session_token="tok-abc",
        user_id=4,
        current_hospital_center_id=1,
        login_time=clock.now(),
        expires_at=clock.now() + timedelta(hours=12),
        is_active=True,
    )
    mock_uow.sessions.get_by_token.return_value = session
    mock_uow.users.get_by_id.return_value = User(id=4, email="doc@clinic.org", is_active=True)
    mock_uow.assignments.get.return_value = CenterAssignment(
        user_id=4, hospital_center_id=1, role=CenterRole.medical_staff, is_active=True
    )
    mock_uow.centers.get_by_id.return_value = HospitalCenter(id=1, name="Alpha Clinic")
    return mock_uow


@pytest.mark.asyncio
async def test_extend_defaults_to_full_lifetime(live_uow, services, clock, audit_sink):
    result = await ExtendSessionUseCase(live_uow, services).execute("tok-abc")

    assert result.is_ok()
    live_uow.sessions.extend.assert_awaited_once_with(
        "tok-abc", clock.now(), clock.now() + timedelta(hours=12)
    )
    live_uow.commit.assert_awaited_once()
    assert audit_sink.of_type("session_extended")


@pytest.mark.asyncio
async def test_extend_by_requested_time(live_uow, services, clock):
    await ExtendSessionUseCase(live_uow, services).execute(
        "tok-abc", timedelta(minutes=30)
    )

    live_uow.sessions.extend.assert_awaited_once_with(
        "tok-abc", clock.now(), clock.now() + timedelta(minutes=30)
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("additional", [timedelta(0), timedelta(minutes=-5)])
async def test_extend_rejects_non_positive_durations(live_uow, services, additional):
    """
    Given a zero or negative extension
    When the session is extended
    Then nothing is written and the request is refused
    """
    result = await ExtendSessionUseCase(live_uow, services).execute("tok-abc", additional)

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    live_uow.sessions.extend.assert_not_awaited()
    live_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_store_refuses_zero_extension(mock_uow, clock):
    store = SessionStore(mock_uow, clock)

    with pytest.raises(ValueError):
        await store.extend("tok-abc", timedelta(0))

    mock_uow.sessions.extend.assert_not_awaited()
