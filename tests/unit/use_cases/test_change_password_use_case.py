import pytest

from src.app.use_cases.auth.change_password_use_case import ChangePasswordUseCase
from src.domain.entities import User


@pytest.fixture
def user(password_policy):
    return User(
        id=7,
        email="nurse@clinic.org",
        first_name="Joan",
        last_name="Watts",
        password_hash=password_policy.hash("Secret1!"),
        must_change_password=True,
    )


@pytest.mark.asyncio
async def test_change_password_with_correct_current(mock_uow, user, services, password_policy, audit_sink):
    # Arrange
    mock_uow.users.get_by_id.return_value = user

    # Act
    result = await ChangePasswordUseCase(mock_uow, services).execute(
        7, "Secret1!", "N3w-Pass!"
    )

    # Assert
    assert result.is_ok()
    assert password_policy.verify("N3w-Pass!", user.password_hash)
    assert user.must_change_password is False
    mock_uow.commit.assert_awaited_once()
    assert audit_sink.of_type("password_changed")[0]["success"] is True


@pytest.mark.asyncio
async def test_wrong_current_password_is_rejected(mock_uow, user, services, password_policy):
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, services).execute(
        7, "Wrong1!x", "N3w-Pass!"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert password_policy.verify("Secret1!", user.password_hash)
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_weak_password_rejected_before_current_is_checked(mock_uow, user, services):
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, services).execute(
        7, "Wrong1!x", "weak"
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    assert len(result.error.details["errors"]) >= 3
    mock_uow.users.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_password_with_personal_information_rejected(mock_uow, user, services):
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, services).execute(
        7, "Secret1!", "Watts#2024x"
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"
    assert "Password must not contain your name or email" in result.error.details["errors"]


@pytest.mark.asyncio
async def test_new_password_must_differ(mock_uow, user, services):
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, services).execute(
        7, "Secret1!", "Secret1!"
    )

    assert result.is_err()
    assert result.error.code == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_forced_change_may_skip_current_password(mock_uow, user, services, password_policy):
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, services).execute(
        7, "", "N3w-Pass!", forced=True
    )

    assert result.is_ok()
    assert password_policy.verify("N3w-Pass!", user.password_hash)
    assert user.must_change_password is False


@pytest.mark.asyncio
async def test_empty_current_password_rejected_when_not_forced(mock_uow, user, services):
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow, services).execute(7, "", "N3w-Pass!")

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_unknown_user(mock_uow, services):
    result = await ChangePasswordUseCase(mock_uow, services).execute(
        99, "Secret1!", "N3w-Pass!"
    )

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
