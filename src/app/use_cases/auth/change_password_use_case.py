"""
Change Password Use Case

Lets a user replace their password, including the forced change that
follows a temporary password.
"""

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import ChangePasswordResponse


class ChangePasswordUseCase:
    """
    Use case for changing a password.

    Business Rules:
    - The new password is checked against the strength rules first; nothing
      is written when it fails
    - The current password must verify, except in forced mode where it may
      be left empty
    - The new password must differ from the current one
    - Success clears must_change_password
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        user_id: int,
        current_password: str,
        new_password: str,
        forced: bool = False,
    ) -> Result[ChangePasswordResponse]:
        """
        Execute change password use case.

        Args:
            user_id: Account whose password changes
            current_password: Password in use now (may be empty when forced)
            new_password: Replacement password
            forced: True while the account is flagged must_change_password

        Returns:
            Result with ChangePasswordResponse, or Error (USER_NOT_FOUND,
            VALIDATION_FAILED, INVALID_CREDENTIALS)
        """
        policy = self.services.password_policy

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            strength = policy.validate_strength(new_password, user)
            if not strength.is_valid:
                return await self._fail(
                    user_id,
                    Error(
                        "VALIDATION_FAILED",
                        "New password does not meet the password policy",
                        {"errors": strength.errors},
                    ),
                )

            if not (forced and not current_password):
                if not policy.verify(current_password, user.password_hash):
                    return await self._fail(
                        user_id,
                        Error("INVALID_CREDENTIALS", "Current password is incorrect"),
                    )

            if policy.verify(new_password, user.password_hash):
                return await self._fail(
                    user_id,
                    Error(
                        "VALIDATION_FAILED",
                        "New password must differ from the current password",
                        {"errors": ["New password must differ from the current password"]},
                    ),
                )

            user.password_hash = policy.hash(new_password)
            user.must_change_password = False
            user.modified_by = user_id
            user.modified_at = self.services.clock.now()
            await self.uow.users.update(user)
            await self.uow.commit()

        await self.services.audit.record(
            SecurityEventType.password_changed,
            success=True,
            actor_user_id=user_id,
            subject_user_id=user_id,
            details={"forced": forced},
        )
        return Return.ok(
            ChangePasswordResponse(status="changed", message="Password changed successfully")
        )

    async def _fail(self, user_id: int, error: Error) -> Result[ChangePasswordResponse]:
        await self.services.audit.record(
            SecurityEventType.password_changed,
            success=False,
            actor_user_id=user_id,
            subject_user_id=user_id,
            failure_reason=error.code,
        )
        return Return.err(error)
