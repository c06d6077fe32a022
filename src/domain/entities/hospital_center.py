"""
HospitalCenter Entity

An organizational unit (hospital location) that scopes role assignments.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .user import utcnow


class HospitalCenter(SQLModel, table=True):
    """
    HospitalCenter entity - a hospital location.

    Business Rules:
    - Deactivated centers are not accessible, even with an active assignment
    """

    __tablename__ = "hospital_centers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    address: str = Field(default="", max_length=500)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_center_is_active", "is_active"),)
