"""
Set User Active Status Use Case

Deactivates or reactivates an account.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import UserStatusResponse

logger = logging.getLogger(__name__)


class SetUserActiveStatusUseCase:
    """
    Use case for account activation and deactivation.

    Business Rules:
    - Accounts are never deleted, only deactivated
    - Deactivation terminates every active session of the user in the same
      transaction: either both happen or neither does
    - Reactivation does not restore old sessions
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, user_id: int, is_active: bool, changed_by: Optional[int] = None
    ) -> Result[UserStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.is_active = is_active
            user.modified_by = changed_by
            user.modified_at = self.services.clock.now()
            await self.uow.users.update(user)

            terminated = 0
            if not is_active:
                store = SessionStore(self.uow, self.services.clock)
                terminated = await store.terminate_all_for_user(user_id)

            await self.uow.commit()

        logger.info(
            f"User {user_id} {'activated' if is_active else 'deactivated'} by {changed_by}"
        )
        await self.services.audit.record(
            SecurityEventType.user_status_changed,
            success=True,
            actor_user_id=changed_by,
            subject_user_id=user_id,
            details={"is_active": is_active, "terminated_sessions": terminated},
        )
        return Return.ok(
            UserStatusResponse(
                user_id=user_id, is_active=is_active, terminated_sessions=terminated
            )
        )
