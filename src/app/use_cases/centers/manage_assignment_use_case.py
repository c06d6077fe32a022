"""
Assignment Management Use Cases

Grant, revoke and re-role (user, center) assignments.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.center_directory import CenterAssignmentDirectory
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType
from .dtos import AssignmentInfo, RevokeAssignmentResponse


class GrantAssignmentUseCase:
    """
    Use case for granting a role in a center.

    Business Rules:
    - Role must be one of the known center roles
    - User and active center must exist
    - An active grant for the pair is a conflict; an inactive one is
      reactivated with the new role
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        user_id: int,
        center_id: int,
        role: str,
        granted_by: Optional[int] = None,
    ) -> Result[AssignmentInfo]:
        async with self.uow:
            directory = CenterAssignmentDirectory(self.uow, self.services.clock)
            result = await directory.grant(user_id, center_id, role, granted_by)
            if result.is_err():
                return result
            info = AssignmentInfo.from_entity(result.value)
            await self.uow.commit()

        await self.services.audit.record(
            SecurityEventType.assignment_granted,
            success=True,
            actor_user_id=granted_by,
            subject_user_id=user_id,
            center_id=center_id,
            details={"role": info.role},
        )
        return Return.ok(info)


class RevokeAssignmentUseCase:
    """
    Use case for revoking an assignment.

    Business Rules:
    - Idempotent: revoking when nothing is active reports revoked=False
    - Sessions sitting on the revoked center lose access at their next
      validation
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self, user_id: int, center_id: int, revoked_by: Optional[int] = None
    ) -> Result[RevokeAssignmentResponse]:
        async with self.uow:
            directory = CenterAssignmentDirectory(self.uow, self.services.clock)
            revoked = await directory.revoke(user_id, center_id, revoked_by)
            if revoked:
                await self.uow.commit()

        if revoked:
            await self.services.audit.record(
                SecurityEventType.assignment_revoked,
                success=True,
                actor_user_id=revoked_by,
                subject_user_id=user_id,
                center_id=center_id,
            )
        return Return.ok(
            RevokeAssignmentResponse(user_id=user_id, center_id=center_id, revoked=revoked)
        )


class ChangeAssignmentRoleUseCase:
    """Use case for changing the role of an active assignment"""

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        user_id: int,
        center_id: int,
        role: str,
        changed_by: Optional[int] = None,
    ) -> Result[AssignmentInfo]:
        async with self.uow:
            existing = await self.uow.assignments.get(user_id, center_id)
            old_role = existing.role.value if existing is not None else None

            directory = CenterAssignmentDirectory(self.uow, self.services.clock)
            result = await directory.change_role(user_id, center_id, role, changed_by)
            if result.is_err():
                return result
            info = AssignmentInfo.from_entity(result.value)
            await self.uow.commit()

        await self.services.audit.record(
            SecurityEventType.assignment_role_changed,
            success=True,
            actor_user_id=changed_by,
            subject_user_id=user_id,
            center_id=center_id,
            details={"old_role": old_role, "new_role": info.role},
        )
        return Return.ok(info)
