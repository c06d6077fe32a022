"""
Password Policy

Hashing delegate plus the strength rules applied to every new password.
"""

import re
import secrets
from typing import List, Optional

from pydantic import BaseModel

from src.app.services.password_hasher import PasswordHasher
from src.domain.entities import User

MIN_LENGTH = 8
# bcrypt ignores everything past 72 bytes
MAX_BYTES = 72
SPECIAL_CHARACTERS = re.compile(r'[!@#$%^&*(),.?":{}|<>]')
FORBIDDEN_WORDS = ("password", "123456", "admin", "user", "guest", "hosp", "hospital")
# No 0/O, 1/l/I
TEMPORARY_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789"
TEMPORARY_LENGTH = 10


class PasswordStrength(BaseModel):
    """Outcome of a strength check"""

    is_valid: bool
    errors: List[str]
    score: int
    level: str


def _level(score: int) -> str:
    if score >= 80:
        return "Strong"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Weak"


def _personal_tokens(user: Optional[User]) -> List[str]:
    if user is None:
        return []
    tokens = [user.first_name or "", user.last_name or ""]
    if user.email:
        tokens.append(user.email.split("@", 1)[0])
    return [t.lower() for t in tokens if len(t) >= 3]


class PasswordPolicy:
    """
    Password hashing and strength rules.

    Business Rules:
    - Empty passwords are never hashed
    - verify() returns False instead of raising on bad input
    - A password is valid iff no rule is violated, whatever its score
    - Temporary passwords are random and not held to the strength rules;
      the account receiving one must be flagged must_change_password
    """

    def __init__(self, hasher: PasswordHasher):
        self.hasher = hasher
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        if not password or not password.strip():
            raise ValueError("Password cannot be empty")
        return self.hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        return self.hasher.verify(password, password_hash)

    def verify_dummy(self, password: str) -> None:
        """Spend one hash check when there is no account to check against"""
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(secrets.token_urlsafe(16))
        self.hasher.verify(password or "-", self._dummy_hash)

    def validate_strength(
        self, password: str, user: Optional[User] = None
    ) -> PasswordStrength:
        """
        Score a password from 0 to 100 and list every rule it breaks.

        Args:
            password: Candidate password
            user: Owner of the password; enables the personal-information rule

        Returns:
            PasswordStrength with errors, score and level
        """
        if not password:
            return PasswordStrength(
                is_valid=False, errors=["Password is required"], score=0, level="Weak"
            )

        errors = []
        score = 0

        if len(password) < MIN_LENGTH:
            errors.append(f"Password must be at least {MIN_LENGTH} characters long")
        else:
            score += 25
            if len(password) >= 12:
                score += 10

        if len(password.encode()) > MAX_BYTES:
            errors.append(f"Password must be at most {MAX_BYTES} bytes long")

        if re.search(r"[A-Z]", password):
            score += 15
        else:
            errors.append("Password must contain at least one uppercase letter")

        if re.search(r"[a-z]", password):
            score += 15
        else:
            errors.append("Password must contain at least one lowercase letter")

        if re.search(r"[0-9]", password):
            score += 15
        else:
            errors.append("Password must contain at least one digit")

        if SPECIAL_CHARACTERS.search(password):
            score += 20
        else:
            errors.append(
                "Password must contain at least one special character (!@#$%^&*...)"
            )

        if len(password) >= 16:
            score += 10

        lowered = password.lower()
        personal = _personal_tokens(user)
        if not any(word in lowered for word in FORBIDDEN_WORDS + tuple(personal)):
            score += 10

        if any(token in lowered for token in personal):
            errors.append("Password must not contain your name or email")

        score = min(score, 100)
        return PasswordStrength(
            is_valid=not errors, errors=errors, score=score, level=_level(score)
        )

    def generate_temporary(self) -> str:
        return "".join(
            secrets.choice(TEMPORARY_ALPHABET) for _ in range(TEMPORARY_LENGTH)
        )
