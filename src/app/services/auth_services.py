from dataclasses import dataclass
from datetime import timedelta

from src.app.services.audit_sink import AuditTrail
from src.app.services.clock import Clock
from src.app.services.password_policy import PasswordPolicy
from src.app.services.session_store import DEFAULT_LIFETIME


@dataclass
class AuthServices:
    """Stateless collaborators shared by the auth use cases"""

    password_policy: PasswordPolicy
    audit: AuditTrail
    clock: Clock
    session_lifetime: timedelta = DEFAULT_LIFETIME
