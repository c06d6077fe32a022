import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import SecurityAuditEventRepository
from src.adapter.repositories.center_assignment_repository import (
    CenterAssignmentRepository,
)
from src.adapter.repositories.hospital_center_repository import HospitalCenterRepository
from src.adapter.repositories.last_selected_center_repository import (
    LastSelectedCenterRepository,
)
from src.adapter.repositories.session_repository import UserSessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import StorageError, UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern

    Anything not committed is rolled back on exit. SQLAlchemy errors leaving
    the block are re-raised as StorageError.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.centers = HospitalCenterRepository(self.session)
        self.assignments = CenterAssignmentRepository(self.session)
        self.sessions = UserSessionRepository(self.session)
        self.last_selected = LastSelectedCenterRepository(self.session)
        self.audit_events = SecurityAuditEventRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        try:
            await self.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error(f"Rollback failed: {rollback_error!r}")
            if exc is None:
                raise StorageError("Rollback failed") from rollback_error

        if isinstance(exc, SQLAlchemyError):
            logger.error(f"Storage failure: {exc.__class__.__name__}")
            raise StorageError(str(exc)) from exc

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
