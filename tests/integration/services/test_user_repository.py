import pytest

from src.adapter.repositories.user_repository import UserRepository
from src.app.repositories.user_repository import DuplicateEmailError
from src.domain.entities import User
from tests.fixtures.seed import create_user


@pytest.mark.asyncio
async def test_insert_with_taken_email_raises_duplicate(db_session, password_policy):
    await create_user(db_session, password_policy, "nurse@clinic.org", "Secret1!")
    repository = UserRepository(db_session)

    with pytest.raises(DuplicateEmailError):
        await repository.create(
            User(
                email=" Nurse@Clinic.org",
                first_name="Nina",
                last_name="Ray",
                password_hash=password_policy.hash("Secret1!"),
            )
        )
    await db_session.rollback()

    assert (await repository.get_by_email("NURSE@clinic.org")).first_name == "Test"
