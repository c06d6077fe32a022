"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.app.services.center_directory import CenterAccess
from src.domain.entities import User


# ============================================================================
# Commands
# ============================================================================


class LoginCommand(BaseModel):
    """Login intent, free of HTTP concerns"""

    email: str
    password: str
    center_id: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    must_change_password: bool

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            must_change_password=user.must_change_password,
        )


class LoginResponse(BaseModel):
    """Response for user login use case"""

    session_token: str
    session_id: int
    expires_at: datetime
    user: UserInfo
    current_center: CenterAccess
    accessible_centers: List[CenterAccess]
    requires_password_change: bool


class LogoutResponse(BaseModel):
    """Response for logout use cases"""

    status: str
    terminated_sessions: int


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """
    Response for reset password use case

    temporary_password is shown once to the administrator and never stored
    or logged in clear text.
    """

    user_id: int
    temporary_password: str
    terminated_sessions: int
    message: str
