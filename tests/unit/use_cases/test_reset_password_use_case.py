from unittest.mock import AsyncMock

import pytest

from src.app.use_cases.auth.reset_password_use_case import ResetPasswordUseCase
from src.domain.entities import User


@pytest.mark.asyncio
async def test_reset_issues_temporary_password_and_ends_sessions(mock_uow, services, password_policy, audit_sink, caplog):
    # Arrange
    user = User(id=5, email="doc@clinic.org", password_hash=password_policy.hash("Secret1!"))
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.terminate_all_for_user = AsyncMock(return_value=2)

    # Act
    result = await ResetPasswordUseCase(mock_uow, services).execute(5, reset_by=1)

    # Assert
    assert result.is_ok()
    temporary = result.value.temporary_password
    assert len(temporary) == 10
    assert password_policy.verify(temporary, user.password_hash)
    assert not password_policy.verify("Secret1!", user.password_hash)
    assert user.must_change_password is True
    assert user.modified_by == 1
    assert result.value.terminated_sessions == 2
    mock_uow.commit.assert_awaited_once()

    event = audit_sink.of_type("password_reset")[0]
    assert event["actor_user_id"] == 1
    assert event["subject_user_id"] == 5
    assert temporary not in caplog.text


@pytest.mark.asyncio
async def test_reset_unknown_user(mock_uow, services):
    result = await ResetPasswordUseCase(mock_uow, services).execute(404, reset_by=1)

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.commit.assert_not_awaited()
