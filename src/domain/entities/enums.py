"""
Hospital Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class CenterRole(str, Enum):
    """Role a user holds within one hospital center"""

    super_admin = "SuperAdmin"
    medical_staff = "MedicalStaff"


class SecurityEventType(str, Enum):
    """Security-relevant transitions recorded by the audit sink"""

    login = "login"
    logout = "logout"
    password_changed = "password_changed"
    password_reset = "password_reset"
    password_change_forced = "password_change_forced"
    center_switch = "center_switch"
    assignment_granted = "assignment_granted"
    assignment_revoked = "assignment_revoked"
    assignment_role_changed = "assignment_role_changed"
    session_expired = "session_expired"
    session_extended = "session_extended"
    user_created = "user_created"
    user_status_changed = "user_status_changed"


class SessionEndReason(str, Enum):
    """Why a session stopped being active"""

    logged_out = "logged_out"
    expired = "expired"
