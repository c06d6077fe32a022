"""
SecurityAuditEvent Entity

Immutable log of all authentication/authorization events.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from .user import utcnow


class SecurityAuditEvent(SQLModel, table=True):
    """
    SecurityAuditEvent entity - immutable log of security transitions.

    Business Rules:
    - Append-only (never updated or deleted)
    - actor_user_id is who acted, subject_user_id who was acted upon
    - Failed attempts are recorded too, with failure_reason
    - Metadata stores free-form context (old/new center, counts, etc.)
    """

    __tablename__ = "security_audit_events"

    id: Optional[int] = Field(default=None, primary_key=True)

    event_type: str = Field(max_length=64)  # SecurityEventType value
    success: bool = Field(default=True)

    actor_user_id: Optional[int] = Field(default=None, index=True)
    subject_user_id: Optional[int] = Field(default=None, index=True)
    hospital_center_id: Optional[int] = Field(default=None, index=True)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    failure_reason: Optional[str] = Field(default=None, max_length=100)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_event_type", "event_type", "success"),
    )
