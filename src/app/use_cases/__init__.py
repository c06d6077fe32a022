"""
Use Cases

Organized into domain folders:
- auth/: Login, logout and password lifecycle
- sessions/: Session validation, extension and listing
- centers/: Center switching and assignments
- users/: Account administration
- audit/: Security event log and statistics

Import from subdirectories for better organization.
"""

from .auth import (
    LoginUseCase,
    LogoutUseCase,
    ChangePasswordUseCase,
    ResetPasswordUseCase,
    ValidatePasswordUseCase,
)
from .sessions import (
    ValidateSessionUseCase,
    ExtendSessionUseCase,
    ListActiveSessionsUseCase,
    GetSessionDetailsUseCase,
)
from .centers import (
    SwitchCenterUseCase,
    GetAccessibleCentersUseCase,
    GrantAssignmentUseCase,
    RevokeAssignmentUseCase,
    ChangeAssignmentRoleUseCase,
)
from .users import (
    CreateUserUseCase,
    SetUserActiveStatusUseCase,
    ForcePasswordChangeUseCase,
    CheckUserStatusUseCase,
)
from .audit import (
    GetSecurityEventsUseCase,
    GetAuthenticationStatisticsUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "ResetPasswordUseCase",
    "ValidatePasswordUseCase",
    # Sessions
    "ValidateSessionUseCase",
    "ExtendSessionUseCase",
    "ListActiveSessionsUseCase",
    "GetSessionDetailsUseCase",
    # Centers
    "SwitchCenterUseCase",
    "GetAccessibleCentersUseCase",
    "GrantAssignmentUseCase",
    "RevokeAssignmentUseCase",
    "ChangeAssignmentRoleUseCase",
    # Users
    "CreateUserUseCase",
    "SetUserActiveStatusUseCase",
    "ForcePasswordChangeUseCase",
    "CheckUserStatusUseCase",
    # Audit
    "GetSecurityEventsUseCase",
    "GetAuthenticationStatisticsUseCase",
]
