"""
Center Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.services.center_directory import CenterAccess
from src.domain.entities import CenterAssignment


class SwitchCenterResponse(BaseModel):
    """Response for center switch use case"""

    previous_center_id: int
    current_center: CenterAccess
    switched: bool


class AssignmentInfo(BaseModel):
    """A (user, center, role) grant"""

    user_id: int
    center_id: int
    role: str
    is_active: bool
    assignment_start_date: datetime
    assignment_end_date: Optional[datetime] = None

    @classmethod
    def from_entity(cls, assignment: CenterAssignment) -> "AssignmentInfo":
        return cls(
            user_id=assignment.user_id,
            center_id=assignment.hospital_center_id,
            role=assignment.role.value,
            is_active=assignment.is_active,
            assignment_start_date=assignment.assignment_start_date,
            assignment_end_date=assignment.assignment_end_date,
        )


class RevokeAssignmentResponse(BaseModel):
    """Response for assignment revocation; revoked=False when nothing was active"""

    user_id: int
    center_id: int
    revoked: bool
