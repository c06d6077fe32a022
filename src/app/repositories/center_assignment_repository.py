from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import CenterAssignment, CenterRole, HospitalCenter


class DuplicateAssignmentError(Exception):
    """Raised when the (user, center) unique index rejects an insert"""


class ICenterAssignmentRepository(ABC):
    """CenterAssignment repository interface - application layer"""

    @abstractmethod
    async def get(self, user_id: int, center_id: int) -> Optional[CenterAssignment]:
        """Get the assignment row for a (user, center) pair, active or not"""
        pass

    @abstractmethod
    async def get_active_with_centers(
        self, user_id: int
    ) -> List[Tuple[CenterAssignment, HospitalCenter]]:
        """
        Get active assignments of a user in active centers.

        Returns:
            List of (assignment, center) pairs ordered by center name
        """
        pass

    @abstractmethod
    async def has_active(
        self, user_id: int, center_id: int, role: Optional[CenterRole] = None
    ) -> bool:
        """True if the user holds an active assignment in the active center"""
        pass

    @abstractmethod
    async def create(self, assignment: CenterAssignment) -> CenterAssignment:
        """
        Create a new assignment.

        Raises:
            DuplicateAssignmentError: a row for the pair already exists
        """
        pass

    @abstractmethod
    async def update(self, assignment: CenterAssignment) -> CenterAssignment:
        """Update existing assignment"""
        pass
