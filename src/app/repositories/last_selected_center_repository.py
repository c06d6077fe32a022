from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import UserLastSelectedCenter


class ILastSelectedCenterRepository(ABC):
    """UserLastSelectedCenter repository interface - application layer"""

    @abstractmethod
    async def get(self, user_id: int) -> Optional[UserLastSelectedCenter]:
        """Get the last selected center memo of a user"""
        pass

    @abstractmethod
    async def upsert(self, user_id: int, center_id: int, selected_at: datetime) -> None:
        """Insert or overwrite the memo in a single statement"""
        pass
