"""
User Administration DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import UserInfo


class CreateUserCommand(BaseModel):
    """
    Create user command - validated intent of an administrator

    Created by API layer after request validation passes.
    """

    email: str
    first_name: str
    last_name: str


class CreateUserResponse(BaseModel):
    """New account and its one-time temporary password"""

    user: UserInfo
    temporary_password: str


class UserStatusResponse(BaseModel):
    """Response for activation/deactivation"""

    user_id: int
    is_active: bool
    terminated_sessions: int


class ForcePasswordChangeResponse(BaseModel):
    """Response for force password change use case"""

    user_id: int
    must_change_password: bool


class UserStatusCheck(BaseModel):
    """Account state as seen by an administrator"""

    user_id: int
    status: str  # "Active" or "Inactive"
    is_active: bool
    requires_password_change: bool
    last_login_at: Optional[datetime] = None
    days_since_last_login: Optional[int] = None  # None if never logged in
