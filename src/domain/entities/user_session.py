"""
UserSession Entity

Server-side record of one authenticated client context.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import SessionEndReason
from .user import utcnow


class UserSession(SQLModel, table=True):
    """
    UserSession entity - one authenticated client context.

    Business Rules:
    - session_token is opaque, random (256 bits) and the only lookup key
    - current_hospital_center_id changes on center switch without re-login
    - login_time never moves; expires_at moves only on explicit extension
    - Terminated on logout, explicit termination or expiry; never deleted
    - end_reason records which of logout or expiry closed it
    """

    __tablename__ = "user_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)

    session_token: str = Field(unique=True, index=True, max_length=64)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    current_hospital_center_id: int = Field(
        foreign_key="hospital_centers.id", nullable=False
    )

    is_active: bool = Field(default=True)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    login_time: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    logout_time: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    end_reason: Optional[SessionEndReason] = Field(default=None)

    __table_args__ = (
        Index("idx_session_user_active", "user_id", "is_active"),
        Index("idx_session_expires_at", "expires_at"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
