"""
Center Use Cases

Center switching and (user, center, role) assignment management.
"""

from .switch_center_use_case import SwitchCenterUseCase
from .get_accessible_centers_use_case import GetAccessibleCentersUseCase
from .manage_assignment_use_case import (
    GrantAssignmentUseCase,
    RevokeAssignmentUseCase,
    ChangeAssignmentRoleUseCase,
)
from .dtos import AssignmentInfo, RevokeAssignmentResponse, SwitchCenterResponse

__all__ = [
    # Use Cases
    "SwitchCenterUseCase",
    "GetAccessibleCentersUseCase",
    "GrantAssignmentUseCase",
    "RevokeAssignmentUseCase",
    "ChangeAssignmentRoleUseCase",
    # DTOs
    "SwitchCenterResponse",
    "AssignmentInfo",
    "RevokeAssignmentResponse",
]
