from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import HospitalCenter


class IHospitalCenterRepository(ABC):
    """HospitalCenter repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, center_id: int) -> Optional[HospitalCenter]:
        """Get center by ID"""
        pass

    @abstractmethod
    async def create(self, center: HospitalCenter) -> HospitalCenter:
        """Create a new center"""
        pass
