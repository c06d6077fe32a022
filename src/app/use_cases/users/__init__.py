"""
User Management Use Cases

Account administration by SuperAdmins.
"""

from .create_user_use_case import CreateUserUseCase
from .set_user_active_status_use_case import SetUserActiveStatusUseCase
from .force_password_change_use_case import ForcePasswordChangeUseCase
from .check_user_status_use_case import CheckUserStatusUseCase
from .dtos import (
    CreateUserCommand,
    CreateUserResponse,
    UserStatusResponse,
    ForcePasswordChangeResponse,
    UserStatusCheck,
)

__all__ = [
    # Use Cases
    "CreateUserUseCase",
    "SetUserActiveStatusUseCase",
    "ForcePasswordChangeUseCase",
    "CheckUserStatusUseCase",
    # DTOs
    "CreateUserCommand",
    "CreateUserResponse",
    "UserStatusResponse",
    "ForcePasswordChangeResponse",
    "UserStatusCheck",
]
