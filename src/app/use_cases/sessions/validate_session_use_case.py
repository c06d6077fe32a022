"""
Validate Session Use Case

Resolves a bearer token to the session it stands for.
"""

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionInfo, SessionStore
from src.app.services.unit_of_work import UnitOfWork


class ValidateSessionUseCase:
    """
    Use case for per-request session validation.

    Business Rules:
    - Unknown, closed and expired tokens are reported with distinct codes
    - An expired session is deactivated on first detection
    - The owner must still be active and still be granted the current center
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(self, token: str, check_access: bool = True) -> Result[SessionInfo]:
        """
        Execute validate session use case.

        Args:
            token: Session token
            check_access: Also require an active owner and a still granted
                current center; False only checks the session itself

        Returns:
            Result with SessionInfo, or Error carrying the failed check
        """
        async with self.uow:
            store = SessionStore(
                self.uow,
                self.services.clock,
                self.services.session_lifetime,
                self.services.audit,
            )
            if check_access:
                validation = await store.validate(token)
            else:
                validation = await store.get_live(token)

        if not validation.valid:
            return Return.err(Error(validation.error_code, validation.message))
        return Return.ok(validation.session)
