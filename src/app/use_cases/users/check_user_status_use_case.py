"""
Check User Status Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserStatusCheck


class CheckUserStatusUseCase:
    """
    Reports whether an account can log in and how recently it did.

    days_since_last_login counts calendar days (UTC) between the last
    login and now.
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, user_id: int) -> Result[UserStatusCheck]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        days = None
        if user.last_login_at is not None:
            today = self.services.clock.now().date()
            days = (today - user.last_login_at.date()).days

        return Return.ok(
            UserStatusCheck(
                user_id=user.id,
                status="Active" if user.is_active else "Inactive",
                is_active=user.is_active,
                requires_password_change=user.must_change_password,
                last_login_at=user.last_login_at,
                days_since_last_login=days,
            )
        )
