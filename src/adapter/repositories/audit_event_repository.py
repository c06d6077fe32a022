from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import ISecurityAuditEventRepository
from src.domain.entities import SecurityAuditEvent


def _window(
    stmt,
    event_type: Optional[str],
    since: datetime,
    until: datetime,
    success: Optional[bool],
    center_id: Optional[int],
):
    stmt = stmt.where(
        SecurityAuditEvent.created_at >= since,
        SecurityAuditEvent.created_at <= until,
    )
    if event_type is not None:
        stmt = stmt.where(SecurityAuditEvent.event_type == event_type)
    if success is not None:
        stmt = stmt.where(SecurityAuditEvent.success == success)
    if center_id is not None:
        stmt = stmt.where(SecurityAuditEvent.hospital_center_id == center_id)
    return stmt


class SecurityAuditEventRepository(ISecurityAuditEventRepository):
    """SecurityAuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: SecurityAuditEvent) -> SecurityAuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def list_recent(
        self,
        limit: int = 50,
        event_type: Optional[str] = None,
        center_id: Optional[int] = None,
    ) -> List[SecurityAuditEvent]:
        stmt = select(SecurityAuditEvent)
        if event_type is not None:
            stmt = stmt.where(SecurityAuditEvent.event_type == event_type)
        if center_id is not None:
            stmt = stmt.where(SecurityAuditEvent.hospital_center_id == center_id)
        stmt = stmt.order_by(SecurityAuditEvent.id.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(
        self,
        event_type: Optional[str],
        since: datetime,
        until: datetime,
        success: Optional[bool] = None,
        failure_reason: Optional[str] = None,
        center_id: Optional[int] = None,
    ) -> int:
        stmt = _window(
            select(func.count(SecurityAuditEvent.id)),
            event_type,
            since,
            until,
            success,
            center_id,
        )
        if failure_reason is not None:
            stmt = stmt.where(SecurityAuditEvent.failure_reason == failure_reason)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_distinct_subjects(
        self,
        event_type: str,
        since: datetime,
        until: datetime,
        success: Optional[bool] = None,
        center_id: Optional[int] = None,
    ) -> int:
        stmt = _window(
            select(func.count(func.distinct(SecurityAuditEvent.subject_user_id))),
            event_type,
            since,
            until,
            success,
            center_id,
        )
        result = await self.session.exec(stmt)
        return result.one()
