from datetime import timedelta

import pytest

from src.app.use_cases.centers.switch_center_use_case import SwitchCenterUseCase
from src.domain.entities import (
    CenterAssignment,
    CenterRole,
    HospitalCenter,
    User,
    UserSession,
)


@pytest.fixture
def live_session(clock):
    return UserSession(
        id=3,
        session_token="tok-abc",
        user_id=1,
        current_hospital_center_id=1,
        login_time=clock.now(),
        expires_at=clock.now() + timedelta(hours=12),
        is_active=True,
    )


@pytest.fixture
def ready_uow(mock_uow, live_session):
    mock_uow.sessions.get_by_token.return_value = live_session
    mock_uow.users.get_by_id.return_value = User(id=1, email="a@x.com", password_hash="x")
    mock_uow.assignments.get_active_with_centers.return_value = [
        (
            CenterAssignment(user_id=1, hospital_center_id=1, role=CenterRole.medical_staff),
            HospitalCenter(id=1, name="Alpha Clinic"),
        ),
        (
            CenterAssignment(user_id=1, hospital_center_id=2, role=CenterRole.super_admin),
            HospitalCenter(id=2, name="Beta Hospital"),
        ),
    ]
    return mock_uow


@pytest.mark.asyncio
async def test_switch_to_assigned_center(ready_uow, services, audit_sink, clock):
    # Act
    result = await SwitchCenterUseCase(ready_uow, services).execute("tok-abc", 2)

    # Assert
    assert result.is_ok()
    assert result.value.switched is True
    assert result.value.previous_center_id == 1
    assert result.value.current_center.center_id == 2
    assert result.value.current_center.role == "SuperAdmin"
    ready_uow.sessions.switch_center.assert_awaited_once_with("tok-abc", 1, 2)
    ready_uow.last_selected.upsert.assert_awaited_once_with(1, 2, clock.now())
    ready_uow.commit.assert_awaited_once()

    event = audit_sink.of_type("center_switch")[0]
    assert event["success"] is True
    assert event["details"]["from_center_id"] == 1
    assert event["details"]["to_center_id"] == 2


@pytest.mark.asyncio
async def test_switch_to_unassigned_center_is_refused_and_audited(ready_uow, services, audit_sink):
    result = await SwitchCenterUseCase(ready_uow, services).execute("tok-abc", 3)

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
    ready_uow.sessions.switch_center.assert_not_awaited()
    ready_uow.last_selected.upsert.assert_not_awaited()
    ready_uow.commit.assert_not_awaited()

    event = audit_sink.of_type("center_switch")[0]
    assert event["success"] is False
    assert event["failure_reason"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_switch_to_current_center_is_noop(ready_uow, services, audit_sink):
    result = await SwitchCenterUseCase(ready_uow, services).execute("tok-abc", 1)

    assert result.is_ok()
    assert result.value.switched is False
    ready_uow.sessions.switch_center.assert_not_awaited()
    assert audit_sink.events == []


@pytest.mark.asyncio
async def test_switch_with_unknown_token(mock_uow, services):
    result = await SwitchCenterUseCase(mock_uow, services).execute("missing", 2)

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_switch_on_expired_session(ready_uow, services, clock):
    clock.advance(hours=13)

    result = await SwitchCenterUseCase(ready_uow, services).execute("tok-abc", 2)

    assert result.is_err()
    assert result.error.code == "SESSION_EXPIRED"
    ready_uow.sessions.expire.assert_awaited_once_with("tok-abc")
    ready_uow.sessions.switch_center.assert_not_awaited()


@pytest.mark.asyncio
async def test_concurrent_change_reports_conflict(ready_uow, services):
    ready_uow.sessions.switch_center.return_value = False

    result = await SwitchCenterUseCase(ready_uow, services).execute("tok-abc", 2)

    assert result.is_err()
    assert result.error.code == "CONFLICT"
    ready_uow.commit.assert_not_awaited()
