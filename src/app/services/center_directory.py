"""
Center Assignment Directory

Answers which centers a user may act in, and with which role.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.repositories.center_assignment_repository import DuplicateAssignmentError
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import CenterAssignment, CenterRole


class CenterAccess(BaseModel):
    """One center a user can currently act in"""

    center_id: int
    center_name: str
    role: str
    is_last_selected: bool = False


def parse_role(role: Union[CenterRole, str]) -> Optional[CenterRole]:
    """Map a role name to the closed enumeration, None if unknown"""
    if isinstance(role, CenterRole):
        return role
    try:
        return CenterRole(role)
    except ValueError:
        return None


class CenterAssignmentDirectory:
    """
    Center/role resolution over the assignment store.

    Business Rules:
    - Only active assignments in active centers grant access
    - One row per (user, center): a revoked grant is reactivated in place
    - Never commits; callers own the transaction
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def get_active_centers(self, user_id: int) -> List[CenterAccess]:
        rows = await self.uow.assignments.get_active_with_centers(user_id)
        last_selected = await self.get_last_selected(user_id)
        return [
            CenterAccess(
                center_id=center.id,
                center_name=center.name,
                role=assignment.role.value,
                is_last_selected=center.id == last_selected,
            )
            for assignment, center in rows
        ]

    async def has_assignment(
        self, user_id: int, center_id: int, role: Optional[CenterRole] = None
    ) -> bool:
        return await self.uow.assignments.has_active(user_id, center_id, role)

    async def grant(
        self,
        user_id: int,
        center_id: int,
        role: Union[CenterRole, str],
        granted_by: Optional[int] = None,
    ) -> Result[CenterAssignment]:
        """
        Grant a role in a center.

        Returns:
            Result with the active assignment, or Error
            (VALIDATION_FAILED, USER_NOT_FOUND, CENTER_NOT_FOUND, CONFLICT)
        """
        center_role = parse_role(role)
        if center_role is None:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    f"Unknown role: {role}",
                    {"allowed": [r.value for r in CenterRole]},
                )
            )

        user = await self.uow.users.get_by_id(user_id)
        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        center = await self.uow.centers.get_by_id(center_id)
        if center is None or not center.is_active:
            return Return.err(Error("CENTER_NOT_FOUND", "Hospital center not found"))

        now = self.clock.now()
        existing = await self.uow.assignments.get(user_id, center_id)
        if existing is not None:
            if existing.is_active:
                return Return.err(
                    Error("CONFLICT", "User already has an active assignment in this center")
                )
            existing.is_active = True
            existing.role = center_role
            existing.assignment_start_date = now
            existing.assignment_end_date = None
            existing.modified_by = granted_by
            existing.modified_at = now
            return Return.ok(await self.uow.assignments.update(existing))

        assignment = CenterAssignment(
            user_id=user_id,
            hospital_center_id=center_id,
            role=center_role,
            is_active=True,
            assignment_start_date=now,
            created_by=granted_by,
            created_at=now,
        )
        try:
            created = await self.uow.assignments.create(assignment)
        except DuplicateAssignmentError:
            return Return.err(
                Error("CONFLICT", "User already has an assignment in this center")
            )
        return Return.ok(created)

    async def revoke(
        self,
        user_id: int,
        center_id: int,
        revoked_by: Optional[int] = None,
        end_date: Optional[datetime] = None,
    ) -> bool:
        """False when there is no active assignment to revoke"""
        assignment = await self.uow.assignments.get(user_id, center_id)
        if assignment is None or not assignment.is_active:
            return False

        now = self.clock.now()
        assignment.is_active = False
        assignment.assignment_end_date = end_date or now
        assignment.modified_by = revoked_by
        assignment.modified_at = now
        await self.uow.assignments.update(assignment)
        return True

    async def change_role(
        self,
        user_id: int,
        center_id: int,
        role: Union[CenterRole, str],
        changed_by: Optional[int] = None,
    ) -> Result[CenterAssignment]:
        center_role = parse_role(role)
        if center_role is None:
            return Return.err(Error("VALIDATION_FAILED", f"Unknown role: {role}"))

        assignment = await self.uow.assignments.get(user_id, center_id)
        if assignment is None or not assignment.is_active:
            return Return.err(
                Error("ASSIGNMENT_NOT_FOUND", "No active assignment in this center")
            )

        assignment.role = center_role
        assignment.modified_by = changed_by
        assignment.modified_at = self.clock.now()
        return Return.ok(await self.uow.assignments.update(assignment))

    async def save_last_selected(self, user_id: int, center_id: int) -> None:
        await self.uow.last_selected.upsert(user_id, center_id, self.clock.now())

    async def get_last_selected(self, user_id: int) -> Optional[int]:
        memo = await self.uow.last_selected.get(user_id)
        return memo.last_selected_hospital_center_id if memo else None
