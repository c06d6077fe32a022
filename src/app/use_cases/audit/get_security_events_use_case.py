"""
Get Security Events Use Case

Lists the most recent security events, optionally filtered.
"""

from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType

from .dtos import SecurityEventInfo


class GetSecurityEventsUseCase:
    """
    Use case for reading the security event log.

    Business Rules:
    - Caller authorization (SuperAdmin) is checked by the API layer
    - Results ordered by newest first
    - event_type must be a known security event type
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        limit: int = 50,
        event_type: Optional[str] = None,
        center_id: Optional[int] = None,
    ) -> Result[List[SecurityEventInfo]]:
        if event_type is not None and event_type not in {
            t.value for t in SecurityEventType
        }:
            return Return.err(
                Error("VALIDATION_FAILED", f"Unknown event type: {event_type}")
            )

        async with self.uow:
            events = await self.uow.audit_events.list_recent(
                limit=limit, event_type=event_type, center_id=center_id
            )

        return Return.ok([SecurityEventInfo.from_entity(e) for e in events])
