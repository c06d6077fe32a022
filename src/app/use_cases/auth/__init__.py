"""
Authentication Use Cases

Login, logout and password lifecycle.
"""

from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .change_password_use_case import ChangePasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .validate_password_use_case import ValidatePasswordUseCase
from .dtos import (
    LoginCommand,
    UserInfo,
    LoginResponse,
    LogoutResponse,
    ChangePasswordResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "ResetPasswordUseCase",
    "ValidatePasswordUseCase",
    # DTOs - Commands
    "LoginCommand",
    # DTOs - Responses
    "LoginResponse",
    "LogoutResponse",
    "ChangePasswordResponse",
    "ResetPasswordResponse",
    # DTOs - Nested Models
    "UserInfo",
]
