"""
Audit Use Cases

Read side of the security event log.
"""

from .get_security_events_use_case import GetSecurityEventsUseCase
from .get_authentication_statistics_use_case import GetAuthenticationStatisticsUseCase
from .dtos import AuthenticationStatistics, SecurityEventInfo

__all__ = [
    # Use Cases
    "GetSecurityEventsUseCase",
    "GetAuthenticationStatisticsUseCase",
    # DTOs
    "AuthenticationStatistics",
    "SecurityEventInfo",
]
