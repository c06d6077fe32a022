from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import SecurityAuditEventRepository
from src.app.services.audit_sink import AuditSinkError, ISecurityAuditSink
from src.app.services.clock import Clock
from src.domain.entities import SecurityAuditEvent


class SqlSecurityAuditSink(ISecurityAuditSink):
    """
    Stores events in the security_audit_events table.

    Each event is written in its own database session and transaction,
    independent of the unit of work whose outcome it records. With a clock,
    events are stamped with its time instead of the wall clock.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        clock: Optional[Clock] = None,
    ):
        self.session_factory = session_factory
        self.clock = clock

    async def record(
        self,
        event_type: str,
        success: bool,
        actor_user_id: Optional[int] = None,
        subject_user_id: Optional[int] = None,
        center_id: Optional[int] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        failure_reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        event = SecurityAuditEvent(
            event_type=event_type,
            success=success,
            actor_user_id=actor_user_id,
            subject_user_id=subject_user_id,
            hospital_center_id=center_id,
            ip_address=ip_address,
            user_agent=user_agent,
            failure_reason=failure_reason,
            event_metadata=details,
        )
        if self.clock is not None:
            event.created_at = self.clock.now()
        try:
            async with self.session_factory() as session:
                await SecurityAuditEventRepository(session).create(event)
                await session.commit()
        except SQLAlchemyError as e:
            raise AuditSinkError(f"{e.__class__.__name__}: {e}") from e
