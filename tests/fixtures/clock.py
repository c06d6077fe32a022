from datetime import datetime, timedelta
from typing import Optional

from src.app.services.clock import Clock


class ManualClock(Clock):
    """Clock that only moves when told to"""

    def __init__(self, now: Optional[datetime] = None):
        self._now = now or datetime(2024, 1, 15, 8, 0, 0)

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now += timedelta(**kwargs)
        return self._now
