"""
Get Session Details Use Case

Expands a session token into the user and center context a client
needs to render its header and center picker.
"""

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.center_directory import CenterAssignmentDirectory
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo

from .dtos import SessionDetails


class GetSessionDetailsUseCase:
    """
    Use case for session details.

    Business Rules:
    - The session must pass full validation (live, active owner, granted center)
    - accessible_centers lists every center the owner can switch to
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, token: str) -> Result[SessionDetails]:
        async with self.uow:
            store = SessionStore(
                self.uow,
                self.services.clock,
                self.services.session_lifetime,
                self.services.audit,
            )
            validation = await store.validate(token)
            if not validation.valid:
                return Return.err(Error(validation.error_code, validation.message))
            session = validation.session

            # validate() has already checked the owner exists and is active
            user = await self.uow.users.get_by_id(session.user_id)

            directory = CenterAssignmentDirectory(self.uow, self.services.clock)
            centers = await directory.get_active_centers(session.user_id)

        current = next(
            (c for c in centers if c.center_id == session.current_center_id), None
        )
        if current is None:
            return Return.err(
                Error("UNAUTHORIZED", "User is not assigned to this hospital center")
            )

        return Return.ok(
            SessionDetails(
                session=session,
                user=UserInfo.from_entity(user),
                current_center=current,
                accessible_centers=centers,
            )
        )
