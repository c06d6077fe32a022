from datetime import datetime
from typing import List, Optional

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import IUserSessionRepository
from src.domain.entities import SessionEndReason, UserSession


class UserSessionRepository(IUserSessionRepository):
    """UserSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[UserSession]:
        """Get session by token, always re-read from the database"""
        stmt = (
            select(UserSession)
            .where(UserSession.session_token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: UserSession) -> UserSession:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def expire(self, token: str) -> bool:
        stmt = (
            update(UserSession)
            .where(UserSession.session_token == token, UserSession.is_active == True)
            .values(
                is_active=False,
                logout_time=UserSession.expires_at,
                end_reason=SessionEndReason.expired,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def extend(self, token: str, now: datetime, expires_at: datetime) -> bool:
        stmt = (
            update(UserSession)
            .where(
                UserSession.session_token == token,
                UserSession.is_active == True,
                UserSession.expires_at >= now,
            )
            .values(expires_at=expires_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def switch_center(
        self, token: str, from_center_id: int, to_center_id: int
    ) -> bool:
        stmt = (
            update(UserSession)
            .where(
                UserSession.session_token == token,
                UserSession.is_active == True,
                UserSession.current_hospital_center_id == from_center_id,
            )
            .values(current_hospital_center_id=to_center_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def terminate(self, token: str, logout_time: datetime) -> bool:
        stmt = (
            update(UserSession)
            .where(
                UserSession.session_token == token,
                UserSession.is_active == True,
                UserSession.expires_at >= logout_time,
            )
            .values(
                is_active=False,
                logout_time=logout_time,
                end_reason=SessionEndReason.logged_out,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def terminate_all_for_user(self, user_id: int, logout_time: datetime) -> int:
        stmt = (
            update(UserSession)
            .where(
                UserSession.user_id == user_id,
                UserSession.is_active == True,
                UserSession.expires_at >= logout_time,
            )
            .values(
                is_active=False,
                logout_time=logout_time,
                end_reason=SessionEndReason.logged_out,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def list_active(self, user_id: int, now: datetime) -> List[UserSession]:
        stmt = (
            select(UserSession)
            .where(
                UserSession.user_id == user_id,
                UserSession.is_active == True,
                UserSession.expires_at >= now,
            )
            .order_by(UserSession.login_time.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def expire_all_before(self, now: datetime) -> int:
        stmt = (
            update(UserSession)
            .where(UserSession.is_active == True, UserSession.expires_at < now)
            .values(
                is_active=False,
                logout_time=UserSession.expires_at,
                end_reason=SessionEndReason.expired,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
