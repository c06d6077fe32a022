"""
List Active Sessions Use Case
"""

from typing import List

from libs.result import Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionInfo, SessionStore
from src.app.services.unit_of_work import UnitOfWork


class ListActiveSessionsUseCase:
    """Active, unexpired sessions of one user, newest first"""

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, user_id: int) -> Result[List[SessionInfo]]:
        async with self.uow:
            store = SessionStore(self.uow, self.services.clock)
            sessions = await store.list_active(user_id)
        return Return.ok(sessions)
