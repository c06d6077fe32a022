"""
CenterAssignment Entity

Grants a user a role within one hospital center.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import CenterRole
from .user import utcnow


class CenterAssignment(SQLModel, table=True):
    """
    CenterAssignment entity - (user, center, role) grant.

    Business Rules:
    - A user may hold assignments in several centers, each with its own role
    - (user_id, hospital_center_id) is unique: revoked rows are reactivated,
      never duplicated
    - Revoke sets is_active=False and an end date; rows are never deleted
    """

    __tablename__ = "center_assignments"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    hospital_center_id: int = Field(
        foreign_key="hospital_centers.id", nullable=False, index=True
    )

    role: CenterRole = Field(nullable=False)
    is_active: bool = Field(default=True)

    assignment_start_date: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    assignment_end_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_by: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    modified_by: Optional[int] = Field(default=None)
    modified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_assignment_user_center", "user_id", "hospital_center_id", unique=True),
        Index("idx_assignment_is_active", "is_active"),
    )
