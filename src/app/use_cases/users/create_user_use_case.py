"""
Create User Use Case

Administrative account creation with a temporary password.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.repositories.user_repository import DuplicateEmailError
from src.app.services.auth_services import AuthServices
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.domain.entities import SecurityEventType, User
from .dtos import CreateUserCommand, CreateUserResponse

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user account.

    Business Rules:
    - Email must be unique (case-insensitive), also under concurrent creates
    - Account starts active with a temporary password and
      must_change_password=True
    - Center access is granted separately through assignments
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, command: CreateUserCommand, created_by: Optional[int] = None
    ) -> Result[CreateUserResponse]:
        policy = self.services.password_policy
        email = command.email.strip().lower()

        async with self.uow:
            existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                )

            temporary_password = policy.generate_temporary()
            now = self.services.clock.now()
            user = User(
                email=email,
                first_name=command.first_name.strip(),
                last_name=command.last_name.strip(),
                password_hash=policy.hash(temporary_password),
                is_active=True,
                must_change_password=True,
                created_by=created_by,
                created_at=now,
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "A user with this email already exists")
                )
            await self.uow.commit()

        logger.info(f"User {user.id} created by {created_by}")
        await self.services.audit.record(
            SecurityEventType.user_created,
            success=True,
            actor_user_id=created_by,
            subject_user_id=user.id,
            details={"email": email},
        )
        return Return.ok(
            CreateUserResponse(
                user=UserInfo.from_entity(user), temporary_password=temporary_password
            )
        )
