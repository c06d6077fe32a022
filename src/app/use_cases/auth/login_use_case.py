"""
Login Use Case

Authenticates a user and opens a session in one of their centers.
"""

import logging
from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.center_directory import CenterAccess, CenterAssignmentDirectory
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import LoginCommand, LoginResponse, UserInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class LoginUseCase:
    """
    Use case for user login and session issuance.

    Business Rules:
    - Unknown email, inactive account and wrong password share one message
    - A password hash check runs on every attempt, known email or not
    - User must hold at least one active assignment in an active center
    - Session opens on the requested center if accessible, else on the last
      selected center if still accessible, else on the first by name
    - Updates user.last_login_at and the last selected center
    - Every attempt is audited
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        center_id: Optional[int] = None,
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email (case-insensitive)
            password: Plain text password
            ip_address: Client address, stored on the session
            user_agent: Client user agent, stored on the session
            center_id: Center to open the session on, if the user picked one

        Returns:
            Result with LoginResponse, or Error (INVALID_CREDENTIALS,
            ACCOUNT_INACTIVE, NO_ASSIGNMENTS, UNAUTHORIZED)
        """
        command = LoginCommand(
            email=email,
            password=password,
            center_id=center_id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        policy = self.services.password_policy

        async with self.uow:
            user = await self.uow.users.get_by_email(command.email)

            if user is None:
                policy.verify_dummy(command.password)
                return await self._fail(
                    command, "INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE
                )

            # Checked before the status so inactive accounts cost the same time
            password_valid = policy.verify(command.password, user.password_hash)

            if not user.is_active:
                return await self._fail(
                    command, "ACCOUNT_INACTIVE", INVALID_CREDENTIALS_MESSAGE, user.id
                )

            if not password_valid:
                return await self._fail(
                    command, "INVALID_CREDENTIALS", INVALID_CREDENTIALS_MESSAGE, user.id
                )

            directory = CenterAssignmentDirectory(self.uow, self.services.clock)
            centers = await directory.get_active_centers(user.id)
            if not centers:
                return await self._fail(
                    command,
                    "NO_ASSIGNMENTS",
                    "User has no active assignment in any hospital center",
                    user.id,
                )

            current = self._choose_center(centers, command.center_id)
            if current is None:
                return await self._fail(
                    command,
                    "UNAUTHORIZED",
                    "User is not assigned to the requested hospital center",
                    user.id,
                )

            user.last_login_at = self.services.clock.now()
            await self.uow.users.update(user)

            store = SessionStore(
                self.uow,
                self.services.clock,
                self.services.session_lifetime,
                self.services.audit,
            )
            created = await store.create(
                user.id, current.center_id, command.ip_address, command.user_agent
            )

            await self.uow.commit()

        accessible = [
            c.model_copy(update={"is_last_selected": c.center_id == current.center_id})
            for c in centers
        ]
        current = next(c for c in accessible if c.center_id == current.center_id)

        logger.info(f"User {user.id} logged in to center {current.center_id}")
        await self.services.audit.record(
            SecurityEventType.login,
            success=True,
            actor_user_id=user.id,
            subject_user_id=user.id,
            center_id=current.center_id,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
            details={"session_id": created.session.session_id, "role": current.role},
        )

        return Return.ok(
            LoginResponse(
                session_token=created.token,
                session_id=created.session.session_id,
                expires_at=created.expires_at,
                user=UserInfo.from_entity(user),
                current_center=current,
                accessible_centers=accessible,
                requires_password_change=user.must_change_password,
            )
        )

    @staticmethod
    def _choose_center(
        centers: List[CenterAccess], requested: Optional[int]
    ) -> Optional[CenterAccess]:
        if requested is not None:
            return next((c for c in centers if c.center_id == requested), None)
        last = next((c for c in centers if c.is_last_selected), None)
        return last or centers[0]

    async def _fail(
        self,
        command: LoginCommand,
        code: str,
        message: str,
        user_id: Optional[int] = None,
    ) -> Result[LoginResponse]:
        await self.services.audit.record(
            SecurityEventType.login,
            success=False,
            subject_user_id=user_id,
            center_id=command.center_id,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
            failure_reason=code,
            details={"email": command.email},
        )
        return Return.err(Error(code, message))
