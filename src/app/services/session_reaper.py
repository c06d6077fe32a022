"""
Session Reaper

Background task that deactivates sessions left open past their expiry.
"""

import asyncio
import logging
from typing import Callable, Optional

from src.app.services.audit_sink import AuditTrail
from src.app.services.clock import Clock
from src.app.services.session_store import SessionStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEventType

logger = logging.getLogger(__name__)


class SessionReaper:
    """
    Periodically sweeps expired sessions.

    Business Rules:
    - Each sweep is one conditional UPDATE committed in its own unit of work
    - Safe to run alongside lazy expiry; both only ever set is_active=False
    - One session_expired audit event per non-empty sweep, carrying the count
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        clock: Clock,
        audit: Optional[AuditTrail] = None,
        interval: float = 300.0,
    ):
        self.uow_factory = uow_factory
        self.clock = clock
        self.audit = audit
        self.interval = interval
        self._running = False
        self._task: Optional[asyncio.Task] = None

    async def start(self):
        """Start the reaper."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run())
        logger.info(f"SessionReaper started (interval {self.interval}s)")

    async def stop(self):
        """Stop the reaper."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("SessionReaper stopped")

    async def run_once(self) -> int:
        """Deactivate every session past its expiry. Returns the count."""
        uow = self.uow_factory()
        async with uow:
            store = SessionStore(uow, self.clock, audit=self.audit)
            count = await store.reap_expired()
            await uow.commit()

        if count:
            logger.info(f"SessionReaper expired {count} session(s)")
            if self.audit is not None:
                await self.audit.record(
                    SecurityEventType.session_expired,
                    success=True,
                    details={"count": count, "detected_by": "reaper"},
                )
        else:
            logger.debug("SessionReaper found no expired sessions")
        return count

    async def _run(self):
        """Main sweep loop."""
        while self._running:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"SessionReaper error: {e}", exc_info=True)
            await asyncio.sleep(self.interval)
