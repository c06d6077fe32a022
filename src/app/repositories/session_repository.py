from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import UserSession


class IUserSessionRepository(ABC):
    """
    UserSession repository interface - application layer

    Every state change is a single conditional UPDATE so that concurrent
    requests on the same token never overwrite each other.
    """

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[UserSession]:
        """Get session by token"""
        pass

    @abstractmethod
    async def create(self, session: UserSession) -> UserSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def expire(self, token: str) -> bool:
        """Close an active session as expired; logout_time is its expiry instant"""
        pass

    @abstractmethod
    async def extend(self, token: str, now: datetime, expires_at: datetime) -> bool:
        """Move expires_at of an active, unexpired session. Returns True if updated."""
        pass

    @abstractmethod
    async def switch_center(
        self, token: str, from_center_id: int, to_center_id: int
    ) -> bool:
        """Change the current center of an active session still on from_center_id"""
        pass

    @abstractmethod
    async def terminate(self, token: str, logout_time: datetime) -> bool:
        """Log out one active, unexpired session. Returns True if updated."""
        pass

    @abstractmethod
    async def terminate_all_for_user(self, user_id: int, logout_time: datetime) -> int:
        """Log out all active, unexpired sessions of a user. Returns count."""
        pass

    @abstractmethod
    async def list_active(self, user_id: int, now: datetime) -> List[UserSession]:
        """Active, unexpired sessions of a user, newest first"""
        pass

    @abstractmethod
    async def expire_all_before(self, now: datetime) -> int:
        """Deactivate every active session past its expiry. Returns count."""
        pass
