"""
Get Authentication Statistics Use Case

Aggregates login activity from the security event log.
"""

from datetime import datetime, timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.auth_services import AuthServices
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType

from .dtos import AuthenticationStatistics

DEFAULT_WINDOW = timedelta(days=30)


class GetAuthenticationStatisticsUseCase:
    """
    Use case for authentication statistics.

    Business Rules:
    - Window defaults to the last 30 days ending now
    - Optional center filter applies to every figure
    - Unauthorized attempts are failures of any event type with reason UNAUTHORIZED
    - Success rate is a percentage rounded to two decimals
    """

    def __init__(self, uow: UnitOfWork, services: AuthServices):
        self.uow = uow
        self.services = services

    async def execute(
        self,
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
        center_id: Optional[int] = None,
    ) -> Result[AuthenticationStatistics]:
        to_date = to_date or self.services.clock.now()
        from_date = from_date or to_date - DEFAULT_WINDOW
        if from_date > to_date:
            return Return.err(
                Error("VALIDATION_FAILED", "from_date must not be after to_date")
            )

        window = dict(since=from_date, until=to_date, center_id=center_id)
        login = SecurityEventType.login.value

        async with self.uow:
            events = self.uow.audit_events
            total = await events.count(login, **window)
            successful = await events.count(login, success=True, **window)
            unique_users = await events.count_distinct_subjects(
                login, success=True, **window
            )
            resets = await events.count(SecurityEventType.password_reset.value, **window)
            unauthorized = await events.count(
                None, success=False, failure_reason="UNAUTHORIZED", **window
            )

        return Return.ok(
            AuthenticationStatistics(
                from_date=from_date,
                to_date=to_date,
                center_id=center_id,
                total_login_attempts=total,
                successful_logins=successful,
                failed_logins=total - successful,
                unique_users_logged_in=unique_users,
                password_resets=resets,
                unauthorized_access_attempts=unauthorized,
                success_rate=round(successful * 100.0 / total, 2) if total else 0.0,
            )
        )
