"""
Get Accessible Centers Use Case
"""

from typing import List

from libs.result import Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.center_directory import CenterAccess, CenterAssignmentDirectory
from src.app.services.unit_of_work import UnitOfWork


class GetAccessibleCentersUseCase:
    """Centers the user can act in, ordered by name, with the last selected one flagged"""

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, user_id: int) -> Result[List[CenterAccess]]:
        async with self.uow:
            directory = CenterAssignmentDirectory(self.uow, self.services.clock)
            centers = await directory.get_active_centers(user_id)
        return Return.ok(centers)
