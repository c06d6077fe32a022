"""
Session Store

Server-side sessions: creation, lookup by token, lazy expiry, extension,
termination, listing and sweeping.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field

from src.app.services.audit_sink import AuditTrail
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType, SessionEndReason, UserSession

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = timedelta(hours=12)
TOKEN_BYTES = 32


class SessionInfo(BaseModel):
    """Read-only view of a session; the token itself is never serialized"""

    session_id: int
    session_token: str = Field(exclude=True, repr=False)
    user_id: int
    current_center_id: int
    current_role: Optional[str] = None
    must_change_password: bool = False
    login_time: datetime
    expires_at: datetime
    is_active: bool
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_entity(
        cls, session: UserSession, current_role: Optional[str] = None
    ) -> "SessionInfo":
        return cls(
            session_id=session.id,
            session_token=session.session_token,
            user_id=session.user_id,
            current_center_id=session.current_hospital_center_id,
            current_role=current_role,
            login_time=session.login_time,
            expires_at=session.expires_at,
            is_active=session.is_active,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
        )


class SessionValidation(BaseModel):
    """Outcome of a token check"""

    valid: bool
    expired: bool = False
    error_code: Optional[str] = None
    message: Optional[str] = None
    session: Optional[SessionInfo] = None

    @classmethod
    def failure(cls, error_code: str, message: str, expired: bool = False):
        return cls(valid=False, expired=expired, error_code=error_code, message=message)


class CreatedSession(BaseModel):
    """A new session and its token; the only time the token is handed out"""

    session: SessionInfo
    token: str
    expires_at: datetime


def token_hint(token: str) -> str:
    """Loggable prefix of a token"""
    return f"{token[:6]}..."


class SessionStore:
    """
    Session lifecycle over the session repository.

    Business Rules:
    - Tokens are 256-bit random, URL-safe; the token is the only lookup key
    - Expiry is absolute: expires_at is fixed at creation and only moves on
      extend(); login_time keeps the true age
    - An expired session found by validation is deactivated and committed
      as part of the read; later checks keep reporting SESSION_EXPIRED
    - All other mutations are conditional single-statement updates and are
      committed by the caller
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        lifetime: timedelta = DEFAULT_LIFETIME,
        audit: Optional[AuditTrail] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.lifetime = lifetime
        self.audit = audit

    async def create(
        self,
        user_id: int,
        center_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> CreatedSession:
        now = self.clock.now()
        token = secrets.token_urlsafe(TOKEN_BYTES)
        session = UserSession(
            session_token=token,
            user_id=user_id,
            current_hospital_center_id=center_id,
            login_time=now,
            expires_at=now + self.lifetime,
            is_active=True,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        session = await self.uow.sessions.create(session)
        await self.uow.last_selected.upsert(user_id, center_id, now)
        return CreatedSession(
            session=SessionInfo.from_entity(session),
            token=token,
            expires_at=session.expires_at,
        )

    async def get_live(self, token: str) -> SessionValidation:
        """
        Check that a session exists, is active and not past its expiry.

        Does not look at the owner or the current center; see validate().
        """
        if not token:
            return SessionValidation.failure("SESSION_NOT_FOUND", "Session not found")

        session = await self.uow.sessions.get_by_token(token)
        if session is None:
            return SessionValidation.failure("SESSION_NOT_FOUND", "Session not found")

        if not session.is_active:
            if session.end_reason == SessionEndReason.expired:
                return SessionValidation.failure(
                    "SESSION_EXPIRED", "Session has expired", expired=True
                )
            return SessionValidation.failure("SESSION_INACTIVE", "Session is no longer active")

        if session.is_expired(self.clock.now()):
            await self._expire(session)
            return SessionValidation.failure(
                "SESSION_EXPIRED", "Session has expired", expired=True
            )

        return SessionValidation(valid=True, session=SessionInfo.from_entity(session))

    async def validate(self, token: str) -> SessionValidation:
        """
        Full per-request check of a token.

        Returns:
            SessionValidation; failures carry SESSION_NOT_FOUND,
            SESSION_INACTIVE, SESSION_EXPIRED, ACCOUNT_INACTIVE or
            UNAUTHORIZED (current center no longer granted)
        """
        live = await self.get_live(token)
        if not live.valid:
            return live

        info = live.session
        user = await self.uow.users.get_by_id(info.user_id)
        if user is None or not user.is_active:
            return SessionValidation.failure("ACCOUNT_INACTIVE", "User account is inactive")

        assignment = await self.uow.assignments.get(info.user_id, info.current_center_id)
        center = await self.uow.centers.get_by_id(info.current_center_id)
        if (
            assignment is None
            or not assignment.is_active
            or center is None
            or not center.is_active
        ):
            return SessionValidation(
                valid=False,
                error_code="UNAUTHORIZED",
                message="No longer authorized for the current center",
                session=info,
            )

        info.current_role = assignment.role.value
        info.must_change_password = user.must_change_password
        return SessionValidation(valid=True, session=info)

    async def extend(self, token: str, additional: Optional[timedelta] = None) -> bool:
        """
        Re-anchor expiry at now + additional (default: the full lifetime).

        Returns False unless the session is live.

        Raises:
            ValueError: additional is zero or negative
        """
        if additional is None:
            additional = self.lifetime
        if additional <= timedelta(0):
            raise ValueError("Session extension must be positive")
        now = self.clock.now()
        return await self.uow.sessions.extend(token, now, now + additional)

    async def switch_center(self, session: SessionInfo, center_id: int) -> bool:
        """False if the session changed or closed since it was read"""
        return await self.uow.sessions.switch_center(
            session.session_token, session.current_center_id, center_id
        )

    async def terminate(self, token: str) -> Optional[UserSession]:
        """Log out a live session; None if it was closed or is already past expiry"""
        terminated = await self.uow.sessions.terminate(token, self.clock.now())
        if not terminated:
            return None
        return await self.uow.sessions.get_by_token(token)

    async def terminate_all_for_user(self, user_id: int) -> int:
        return await self.uow.sessions.terminate_all_for_user(user_id, self.clock.now())

    async def list_active(self, user_id: int) -> List[SessionInfo]:
        sessions = await self.uow.sessions.list_active(user_id, self.clock.now())
        return [SessionInfo.from_entity(s) for s in sessions]

    async def reap_expired(self) -> int:
        return await self.uow.sessions.expire_all_before(self.clock.now())

    async def _expire(self, session: UserSession) -> None:
        expired = await self.uow.sessions.expire(session.session_token)
        await self.uow.commit()
        if not expired:
            # Reaper or a concurrent request got there first
            return

        logger.info(
            f"Session {token_hint(session.session_token)} of user {session.user_id} expired"
        )
        if self.audit is not None:
            await self.audit.record(
                SecurityEventType.session_expired,
                success=True,
                subject_user_id=session.user_id,
                center_id=session.current_hospital_center_id,
                details={"session_id": session.id, "detected_by": "validation"},
            )
