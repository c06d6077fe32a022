"""
Hospital Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import CenterRole, SecurityEventType, SessionEndReason

# Export all entities
from .user import User
from .hospital_center import HospitalCenter
from .center_assignment import CenterAssignment
from .user_session import UserSession
from .last_selected_center import UserLastSelectedCenter
from .audit_event import SecurityAuditEvent

__all__ = [
    # Enums
    "CenterRole",
    "SecurityEventType",
    "SessionEndReason",
    # Entities
    "User",
    "HospitalCenter",
    "CenterAssignment",
    "UserSession",
    "UserLastSelectedCenter",
    "SecurityAuditEvent",
]
