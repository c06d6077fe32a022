from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.password_hasher import BcryptPasswordHasher
from src.app.services.audit_sink import AuditTrail
from src.app.services.auth_services import AuthServices
from src.app.services.password_policy import PasswordPolicy
from tests.fixtures.audit import RecordingAuditSink
from tests.fixtures.clock import ManualClock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.centers = MagicMock()
    uow.centers.get_by_id = AsyncMock(return_value=None)

    uow.assignments = MagicMock()
    uow.assignments.get = AsyncMock(return_value=None)
    uow.assignments.get_active_with_centers = AsyncMock(return_value=[])
    uow.assignments.has_active = AsyncMock(return_value=False)
    uow.assignments.create = AsyncMock(side_effect=lambda a: a)
    uow.assignments.update = AsyncMock(side_effect=lambda a: a)

    uow.sessions = MagicMock()
    uow.sessions.get_by_token = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock()
    uow.sessions.expire = AsyncMock(return_value=True)
    uow.sessions.extend = AsyncMock(return_value=True)
    uow.sessions.switch_center = AsyncMock(return_value=True)
    uow.sessions.terminate = AsyncMock(return_value=True)
    uow.sessions.terminate_all_for_user = AsyncMock(return_value=0)
    uow.sessions.list_active = AsyncMock(return_value=[])
    uow.sessions.expire_all_before = AsyncMock(return_value=0)

    uow.last_selected = MagicMock()
    uow.last_selected.get = AsyncMock(return_value=None)
    uow.last_selected.upsert = AsyncMock()

    uow.audit_events = MagicMock()
    uow.audit_events.list_recent = AsyncMock(return_value=[])
    uow.audit_events.count = AsyncMock(return_value=0)
    uow.audit_events.count_distinct_subjects = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def password_policy():
    return PasswordPolicy(BcryptPasswordHasher(rounds=4))


@pytest.fixture
def audit_sink():
    return RecordingAuditSink()


@pytest.fixture
def services(password_policy, audit_sink, clock):
    return AuthServices(
        password_policy=password_policy,
        audit=AuditTrail(audit_sink),
        clock=clock,
        session_lifetime=timedelta(hours=12),
    )
