"""
Reset Password Use Case

Administrative reset to a temporary password.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a user's password.

    Business Rules:
    - Issues a random temporary password and flags must_change_password
    - Terminates every active session of the user in the same transaction
    - The temporary password is returned once and never logged
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        user_id: int,
        reset_by: Optional[int] = None,
        center_id: Optional[int] = None,
    ) -> Result[ResetPasswordResponse]:
        policy = self.services.password_policy

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            temporary_password = policy.generate_temporary()
            user.password_hash = policy.hash(temporary_password)
            user.must_change_password = True
            user.modified_by = reset_by
            user.modified_at = self.services.clock.now()
            await self.uow.users.update(user)

            store = SessionStore(self.uow, self.services.clock)
            terminated = await store.terminate_all_for_user(user_id)

            await self.uow.commit()

        logger.info(
            f"Password of user {user_id} reset by {reset_by}; "
            f"{terminated} session(s) terminated"
        )
        await self.services.audit.record(
            SecurityEventType.password_reset,
            success=True,
            actor_user_id=reset_by,
            subject_user_id=user_id,
            center_id=center_id,
            details={"terminated_sessions": terminated},
        )
        return Return.ok(
            ResetPasswordResponse(
                user_id=user_id,
                temporary_password=temporary_password,
                terminated_sessions=terminated,
                message="Temporary password issued; the user must change it at next login",
            )
        )
