"""
Logout Use Case

Ends either every session of a user or one session.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionStore, token_hint
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - logout() closes all active sessions of the user in one statement
    - logout_session() closes only the session behind the given token
    - Closed sessions keep their row, with logout_time set
    - A session already past its expiry is closed as expired, not logged out
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    def _store(self) -> SessionStore:
        return SessionStore(
            self.uow,
            self.services.clock,
            self.services.session_lifetime,
            self.services.audit,
        )

    async def logout(
        self,
        user_id: int,
        center_id: Optional[int] = None,
        ip_address: Optional[str] = None,
    ) -> Result[LogoutResponse]:
        async with self.uow:
            count = await self._store().terminate_all_for_user(user_id)
            await self.uow.commit()

        logger.info(f"User {user_id} logged out of {count} session(s)")
        await self.services.audit.record(
            SecurityEventType.logout,
            success=True,
            actor_user_id=user_id,
            subject_user_id=user_id,
            center_id=center_id,
            ip_address=ip_address,
            details={"scope": "all", "terminated_sessions": count},
        )
        return Return.ok(LogoutResponse(status="logged_out", terminated_sessions=count))

    async def logout_session(
        self, token: str, ip_address: Optional[str] = None
    ) -> Result[LogoutResponse]:
        async with self.uow:
            store = self._store()
            session = await store.terminate(token)
            if session is None:
                # Reports expiry, closing the session as expired if still open
                live = await store.get_live(token)
                if not live.valid:
                    return Return.err(Error(live.error_code, live.message))
                return Return.err(
                    Error("SESSION_NOT_FOUND", "No active session for this token")
                )
            await self.uow.commit()

        logger.info(f"Session {token_hint(token)} of user {session.user_id} logged out")
        await self.services.audit.record(
            SecurityEventType.logout,
            success=True,
            actor_user_id=session.user_id,
            subject_user_id=session.user_id,
            center_id=session.current_hospital_center_id,
            ip_address=ip_address,
            details={"scope": "session", "session_id": session.id},
        )
        return Return.ok(LogoutResponse(status="logged_out", terminated_sessions=1))
