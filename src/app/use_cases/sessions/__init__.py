"""
Session Use Cases

Validation, extension and listing of server-side sessions.
"""

from .validate_session_use_case import ValidateSessionUseCase
from .extend_session_use_case import ExtendSessionUseCase
from .list_active_sessions_use_case import ListActiveSessionsUseCase
from .get_session_details_use_case import GetSessionDetailsUseCase
from .dtos import SessionDetails

__all__ = [
    # Use Cases
    "ValidateSessionUseCase",
    "ExtendSessionUseCase",
    "ListActiveSessionsUseCase",
    "GetSessionDetailsUseCase",
    # DTOs
    "SessionDetails",
]
