"""
Audit API Routes

Read access to the security event log for SuperAdmins.
"""

from datetime import UTC, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.app.services.auth_services import AuthServices
from src.app.services.session_store import SessionInfo
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import (
    AuthenticationStatistics,
    GetAuthenticationStatisticsUseCase,
    GetSecurityEventsUseCase,
    SecurityEventInfo,
)
from src.depends import get_auth_services, get_unit_of_work, require_super_admin

router = APIRouter(prefix="/audit", tags=["Audit"])

VALIDATION_FAILED = {"VALIDATION_FAILED": status.HTTP_422_UNPROCESSABLE_ENTITY}


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Stored timestamps are naive UTC
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


@router.get(
    "/security-events",
    status_code=status.HTTP_200_OK,
    response_model=List[SecurityEventInfo],
)
async def get_security_events(
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    event_type: Optional[str] = Query(None, description="Only events of this type"),
    center_id: Optional[int] = Query(None, description="Only events in this center"),
):
    """
    Get Security Events

    Most recent security events, newest first.

    Raises:
        - 401 Unauthorized: Invalid or expired session
        - 403 Forbidden: Caller is not SuperAdmin in the current center
        - 422 Unprocessable Entity: Unknown event type
    """
    result = await GetSecurityEventsUseCase(uow).execute(
        limit=limit, event_type=event_type, center_id=center_id
    )
    if result.is_err():
        raise_for_error(result.error, VALIDATION_FAILED)
    return result.value


@router.get(
    "/statistics",
    status_code=status.HTTP_200_OK,
    response_model=AuthenticationStatistics,
)
async def get_authentication_statistics(
    admin: SessionInfo = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: AuthServices = Depends(get_auth_services),
    from_date: Optional[datetime] = Query(
        None, description="Window start (default: 30 days before to_date)"
    ),
    to_date: Optional[datetime] = Query(None, description="Window end (default: now)"),
    center_id: Optional[int] = Query(None, description="Only activity in this center"),
):
    """
    Get Authentication Statistics

    Login attempts, successes, failures, distinct users, password resets
    and unauthorized access attempts over a time window.
    """
    result = await GetAuthenticationStatisticsUseCase(uow, services).execute(
        from_date=_naive_utc(from_date),
        to_date=_naive_utc(to_date),
        center_id=center_id,
    )
    if result.is_err():
        raise_for_error(result.error, VALIDATION_FAILED)
    return result.value
