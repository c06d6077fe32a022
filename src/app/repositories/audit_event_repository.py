from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import SecurityAuditEvent


class ISecurityAuditEventRepository(ABC):
    """SecurityAuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, event: SecurityAuditEvent) -> SecurityAuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def list_recent(
        self,
        limit: int = 50,
        event_type: Optional[str] = None,
        center_id: Optional[int] = None,
    ) -> List[SecurityAuditEvent]:
        """Get most recent audit events, newest first"""
        pass

    @abstractmethod
    async def count(
        self,
        event_type: Optional[str],
        since: datetime,
        until: datetime,
        success: Optional[bool] = None,
        failure_reason: Optional[str] = None,
        center_id: Optional[int] = None,
    ) -> int:
        """Count events created in [since, until], of one type unless event_type is None"""
        pass

    @abstractmethod
    async def count_distinct_subjects(
        self,
        event_type: str,
        since: datetime,
        until: datetime,
        success: Optional[bool] = None,
        center_id: Optional[int] = None,
    ) -> int:
        """Count distinct subject users among events of one type in [since, until]"""
        pass
