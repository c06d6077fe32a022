from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.hospital_center_repository import IHospitalCenterRepository
from src.domain.entities import HospitalCenter


class HospitalCenterRepository(IHospitalCenterRepository):
    """HospitalCenter repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, center_id: int) -> Optional[HospitalCenter]:
        """Get center by ID"""
        stmt = select(HospitalCenter).where(HospitalCenter.id == center_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, center: HospitalCenter) -> HospitalCenter:
        """Create a new center"""
        self.session.add(center)
        await self.session.flush()
        await self.session.refresh(center)
        return center
