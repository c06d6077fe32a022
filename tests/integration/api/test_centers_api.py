import pytest
import pytest_asyncio

from src.adapter.repositories.audit_event_repository import SecurityAuditEventRepository
from src.domain.entities import CenterRole
from tests.fixtures.api import bearer, login
from tests.fixtures.seed import assign, create_center, create_user


@pytest_asyncio.fixture
async def seeded(db_session, password_policy):
    user = await create_user(db_session, password_policy, "a@x.com", "Secret1!")
    beta = await create_center(db_session, "Beta Clinic")
    alpha = await create_center(db_session, "Alpha Clinic")
    await assign(db_session, user.id, beta.id, CenterRole.medical_staff)
    alpha_assignment = await assign(db_session, user.id, alpha.id, CenterRole.super_admin)
    return {"user": user, "alpha": alpha, "beta": beta, "alpha_assignment": alpha_assignment}


@pytest.mark.asyncio
async def test_accessible_centers(client, seeded):
    body = await login(client, "a@x.com", "Secret1!", center_id=seeded["beta"].id)

    response = await client.get("/centers/accessible", headers=bearer(body["session_token"]))

    assert response.status_code == 200
    assert [c["center_name"] for c in response.json()] == ["Alpha Clinic", "Beta Clinic"]
    assert [c["is_last_selected"] for c in response.json()] == [False, True]


@pytest.mark.asyncio
async def test_switch_to_current_center_is_a_no_op(client, seeded):
    body = await login(client, "a@x.com", "Secret1!", center_id=seeded["alpha"].id)

    response = await client.post(
        "/centers/switch",
        json={"center_id": seeded["alpha"].id},
        headers=bearer(body["session_token"]),
    )

    assert response.status_code == 200
    assert response.json()["switched"] is False
    assert response.json()["previous_center_id"] == seeded["alpha"].id


@pytest.mark.asyncio
async def test_refused_switch_is_audited(client, seeded, session_factory):
    body = await login(client, "a@x.com", "Secret1!")

    response = await client.post(
        "/centers/switch", json={"center_id": 999}, headers=bearer(body["session_token"])
    )

    assert response.status_code == 403
    async with session_factory() as session:
        events = await SecurityAuditEventRepository(session).list_recent(
            event_type="center_switch"
        )
    assert len(events) == 1
    assert events[0].success is False
    assert events[0].failure_reason == "UNAUTHORIZED"
    assert events[0].event_metadata["to_center_id"] == 999


@pytest.mark.asyncio
async def test_revoked_current_center_can_still_switch_away(client, seeded, db_session):
    """
    Given a session on a center whose assignment was revoked
    When the user calls a regular endpoint and then switches center
    Then the regular call is refused but the switch succeeds
    """
    body = await login(client, "a@x.com", "Secret1!", center_id=seeded["alpha"].id)
    headers = bearer(body["session_token"])
    seeded["alpha_assignment"].is_active = False
    db_session.add(seeded["alpha_assignment"])
    await db_session.commit()

    refused = await client.get("/sessions/current", headers=headers)
    accessible = await client.get("/centers/accessible", headers=headers)
    switched = await client.post(
        "/centers/switch", json={"center_id": seeded["beta"].id}, headers=headers
    )

    assert refused.status_code == 403
    assert [c["center_name"] for c in accessible.json()] == ["Beta Clinic"]
    assert switched.status_code == 200
    current = await client.get("/sessions/current", headers=headers)
    assert current.json()["current_role"] == "MedicalStaff"


@pytest.mark.asyncio
async def test_switch_with_expired_session(client, seeded, clock):
    body = await login(client, "a@x.com", "Secret1!")
    clock.advance(hours=12, seconds=1)

    response = await client.post(
        "/centers/switch",
        json={"center_id": seeded["beta"].id},
        headers=bearer(body["session_token"]),
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "SESSION_EXPIRED"
