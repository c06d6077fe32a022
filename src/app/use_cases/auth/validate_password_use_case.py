"""
Validate Password Use Case

Exposes the strength check to clients choosing a new password.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.password_policy import PasswordStrength
from src.app.services.unit_of_work import UnitOfWork


class ValidatePasswordUseCase:
    """Scores a candidate password, with the personal-information rule when the owner is known"""

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, password: str, user_id: Optional[int] = None
    ) -> Result[PasswordStrength]:
        user = None
        if user_id is not None:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

        return Return.ok(self.services.password_policy.validate_strength(password, user))
