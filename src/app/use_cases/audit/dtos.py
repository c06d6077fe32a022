"""
Audit DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from src.domain.entities import SecurityAuditEvent


class SecurityEventInfo(BaseModel):
    """One recorded security event"""

    id: int
    event_type: str
    success: bool
    actor_user_id: Optional[int] = None
    subject_user_id: Optional[int] = None
    center_id: Optional[int] = None
    ip_address: Optional[str] = None
    failure_reason: Optional[str] = None
    metadata: Dict[str, Any] = {}
    created_at: datetime

    @classmethod
    def from_entity(cls, event: SecurityAuditEvent) -> "SecurityEventInfo":
        return cls(
            id=event.id,
            event_type=event.event_type,
            success=event.success,
            actor_user_id=event.actor_user_id,
            subject_user_id=event.subject_user_id,
            center_id=event.hospital_center_id,
            ip_address=event.ip_address,
            failure_reason=event.failure_reason,
            metadata=event.event_metadata or {},
            created_at=event.created_at,
        )


class AuthenticationStatistics(BaseModel):
    """Login activity over a time window"""

    from_date: datetime
    to_date: datetime
    center_id: Optional[int] = None
    total_login_attempts: int
    successful_logins: int
    failed_logins: int
    unique_users_logged_in: int
    password_resets: int
    unauthorized_access_attempts: int
    success_rate: float  # percent of attempts, 0.0 when there were none
