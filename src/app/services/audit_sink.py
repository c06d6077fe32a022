"""
Security Audit Sink

Interface of the append-only security event log, plus the best-effort
AuditTrail wrapper the core writes through.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from src.domain.entities import SecurityEventType

logger = logging.getLogger(__name__)

AUDIT_SINK_FAILURE = "AUDIT_SINK_FAILURE"


class AuditSinkError(Exception):
    """The sink could not persist an event"""


class ISecurityAuditSink(ABC):
    """Append-only destination of security events"""

    @abstractmethod
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
        """
        Persist one event.

        Raises:
            AuditSinkError: the event could not be stored
        """
        pass


class AuditTrail:
    """
    Best-effort writer in front of a sink.

    Business Rules:
    - Called only after the state change it describes has been committed
    - A sink failure is logged at WARNING and never propagates, so it can
      neither roll back nor fail the operation that triggered it
    """

    def __init__(self, sink: ISecurityAuditSink):
        self.sink = sink

    async def record(
        self,
        event_type: Union[SecurityEventType, str],
        success: bool = True,
        actor_user_id: Optional[int] = None,
        subject_user_id: Optional[int] = None,
        center_id: Optional[int] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        failure_reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Returns False when the sink rejected the event"""
        event_name = (
            event_type.value if isinstance(event_type, SecurityEventType) else event_type
        )
        try:
            await self.sink.record(
                event_name,
                success,
                actor_user_id=actor_user_id,
                subject_user_id=subject_user_id,
                center_id=center_id,
                ip_address=ip_address,
                user_agent=user_agent,
                failure_reason=failure_reason,
                details=details,
            )
        except AuditSinkError as e:
            logger.warning(
                f"{AUDIT_SINK_FAILURE}: could not record {event_name} event: {e}"
            )
            return False
        return True
