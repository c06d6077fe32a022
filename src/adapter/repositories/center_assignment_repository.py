from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.center_assignment_repository import (
    DuplicateAssignmentError,
    ICenterAssignmentRepository,
)
from src.domain.entities import CenterAssignment, CenterRole, HospitalCenter


class CenterAssignmentRepository(ICenterAssignmentRepository):
    """CenterAssignment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: int, center_id: int) -> Optional[CenterAssignment]:
        stmt = select(CenterAssignment).where(
            CenterAssignment.user_id == user_id,
            CenterAssignment.hospital_center_id == center_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_with_centers(
        self, user_id: int
    ) -> List[Tuple[CenterAssignment, HospitalCenter]]:
        stmt = (
            select(CenterAssignment, HospitalCenter)
            .join(HospitalCenter, HospitalCenter.id == CenterAssignment.hospital_center_id)
            .where(
                CenterAssignment.user_id == user_id,
                CenterAssignment.is_active == True,
                HospitalCenter.is_active == True,
            )
            .order_by(HospitalCenter.name, HospitalCenter.id)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def has_active(
        self, user_id: int, center_id: int, role: Optional[CenterRole] = None
    ) -> bool:
        stmt = (
            select(CenterAssignment.id)
            .join(HospitalCenter, HospitalCenter.id == CenterAssignment.hospital_center_id)
            .where(
                CenterAssignment.user_id == user_id,
                CenterAssignment.hospital_center_id == center_id,
                CenterAssignment.is_active == True,
                HospitalCenter.is_active == True,
            )
        )
        if role is not None:
            stmt = stmt.where(CenterAssignment.role == role)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def create(self, assignment: CenterAssignment) -> CenterAssignment:
        self.session.add(assignment)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateAssignmentError(
                f"Assignment for user {assignment.user_id} in center "
                f"{assignment.hospital_center_id} already exists"
            ) from e
        await self.session.refresh(assignment)
        return assignment

    async def update(self, assignment: CenterAssignment) -> CenterAssignment:
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment
