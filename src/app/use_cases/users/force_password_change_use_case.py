"""
Force Password Change Use Case
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import ForcePasswordChangeResponse


class ForcePasswordChangeUseCase:
    """Flags an account so its next login must pick a new password"""

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, user_id: int, forced_by: Optional[int] = None
    ) -> Result[ForcePasswordChangeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.must_change_password = True
            user.modified_by = forced_by
            user.modified_at = self.services.clock.now()
            await self.uow.users.update(user)
            await self.uow.commit()

        await self.services.audit.record(
            SecurityEventType.password_change_forced,
            success=True,
            actor_user_id=forced_by,
            subject_user_id=user_id,
        )
        return Return.ok(
            ForcePasswordChangeResponse(user_id=user_id, must_change_password=True)
        )
