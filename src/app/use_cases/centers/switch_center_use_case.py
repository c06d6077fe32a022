"""
Switch Center Use Case

Moves a live session to another hospital center without re-login.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.center_directory import CenterAssignmentDirectory
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import SwitchCenterResponse

logger = logging.getLogger(__name__)


class SwitchCenterUseCase:
    """
    Use case for switching the current center of a session.

    Business Rules:
    - Session must be live (found, active, not expired)
    - Target center must be granted by an active assignment in an active
      center; otherwise the session is left unchanged and the attempt audited
    - Session update and last selected center are committed together
    - Switching to the current center succeeds without writing anything
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        token: str,
        center_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[SwitchCenterResponse]:
        """
        Execute switch center use case.

        Args:
            token: Session token
            center_id: Center to switch to
            ip_address: Client address, for the audit trail
            user_agent: Client user agent, for the audit trail

        Returns:
            Result with SwitchCenterResponse, or Error (SESSION_NOT_FOUND,
            SESSION_INACTIVE, SESSION_EXPIRED, ACCOUNT_INACTIVE,
            UNAUTHORIZED, CONFLICT)
        """
        clock = self.services.clock

        async with self.uow:
            store = SessionStore(
                self.uow, clock, self.services.session_lifetime, self.services.audit
            )
            live = await store.get_live(token)
            if not live.valid:
                return Return.err(Error(live.error_code, live.message))

            session = live.session
            user = await self.uow.users.get_by_id(session.user_id)
            if user is None or not user.is_active:
                return Return.err(Error("ACCOUNT_INACTIVE", "User account is inactive"))

            directory = CenterAssignmentDirectory(self.uow, clock)
            centers = await directory.get_active_centers(session.user_id)
            target = next((c for c in centers if c.center_id == center_id), None)

            if target is None:
                logger.warning(
                    f"User {session.user_id} denied switch from center "
                    f"{session.current_center_id} to {center_id}"
                )
                await self.services.audit.record(
                    SecurityEventType.center_switch,
                    success=False,
                    actor_user_id=session.user_id,
                    subject_user_id=session.user_id,
                    center_id=center_id,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    failure_reason="UNAUTHORIZED",
                    details={
                        "from_center_id": session.current_center_id,
                        "to_center_id": center_id,
                    },
                )
                return Return.err(
                    Error("UNAUTHORIZED", "User is not assigned to this hospital center")
                )

            previous_center_id = session.current_center_id
            if previous_center_id == center_id:
                return Return.ok(
                    SwitchCenterResponse(
                        previous_center_id=previous_center_id,
                        current_center=target.model_copy(update={"is_last_selected": True}),
                        switched=False,
                    )
                )

            if not await store.switch_center(session, center_id):
                return Return.err(
                    Error("CONFLICT", "Session changed while switching; please retry")
                )
            await directory.save_last_selected(session.user_id, center_id)
            await self.uow.commit()

        logger.info(
            f"User {session.user_id} switched from center {previous_center_id} to {center_id}"
        )
        await self.services.audit.record(
            SecurityEventType.center_switch,
            success=True,
            actor_user_id=session.user_id,
            subject_user_id=session.user_id,
            center_id=center_id,
            ip_address=ip_address,
            user_agent=user_agent,
            details={
                "from_center_id": previous_center_id,
                "to_center_id": center_id,
                "role": target.role,
            },
        )
        return Return.ok(
            SwitchCenterResponse(
                previous_center_id=previous_center_id,
                current_center=target.model_copy(update={"is_last_selected": True}),
                switched=True,
            )
        )
