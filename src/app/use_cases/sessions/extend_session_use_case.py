"""
Extend Session Use Case

Pushes the expiry of a live session forward.
"""

from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionInfo, SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType


class ExtendSessionUseCase:
    """
    Use case for extending a session.

    Business Rules:
    - Only a valid session can be extended
    - New expiry is now + additional (default: the configured lifetime)
    - additional must be positive when given
    - login_time is left untouched
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, token: str, additional: Optional[timedelta] = None
    ) -> Result[SessionInfo]:
        if additional is not None and additional <= timedelta(0):
            return Return.err(
                Error("VALIDATION_FAILED", "Session extension must be positive")
            )

        async with self.uow:
            store = SessionStore(
                self.uow,
                self.services.clock,
                self.services.session_lifetime,
                self.services.audit,
            )
            validation = await store.validate(token)
            if not validation.valid:
                return Return.err(Error(validation.error_code, validation.message))

            if not await store.extend(token, additional):
                return Return.err(
                    Error("SESSION_INACTIVE", "Session could not be extended")
                )
            await self.uow.commit()

            refreshed = await store.get_live(token)
            if not refreshed.valid:
                return Return.err(Error(refreshed.error_code, refreshed.message))

        session = refreshed.session.model_copy(
            update={"current_role": validation.session.current_role}
        )
        await self.services.audit.record(
            SecurityEventType.session_extended,
            success=True,
            actor_user_id=session.user_id,
            subject_user_id=session.user_id,
            center_id=session.current_center_id,
            details={
                "session_id": session.session_id,
                "expires_at": session.expires_at.isoformat(),
            },
        )
        return Return.ok(session)
