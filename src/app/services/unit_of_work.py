from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import ISecurityAuditEventRepository
from src.app.repositories.center_assignment_repository import ICenterAssignmentRepository
from src.app.repositories.hospital_center_repository import IHospitalCenterRepository
from src.app.repositories.last_selected_center_repository import (
    ILastSelectedCenterRepository,
)
from src.app.repositories.session_repository import IUserSessionRepository
from src.app.repositories.user_repository import IUserRepository


class StorageError(Exception):
    """The entity store failed; the transaction was rolled back"""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    centers: IHospitalCenterRepository
    assignments: ICenterAssignmentRepository
    sessions: IUserSessionRepository
    last_selected: ILastSelectedCenterRepository
    audit_events: ISecurityAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
