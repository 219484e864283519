"""Wall-clock and fixed reference clocks."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from src.core.config import settings
from src.domain.interfaces.clock import ReferenceClock


class SystemClock(ReferenceClock):
    """Today's date in the configured timezone."""

    def __init__(self, timezone: str | None = None):
        self._tz = ZoneInfo(timezone or settings.timezone)

    def today(self) -> date:
        return datetime.now(self._tz).date()


class FixedClock(ReferenceClock):
    """Always returns the same date. Used by tests and replays."""

    def __init__(self, fixed: date):
        self._fixed = fixed

    def today(self) -> date:
        return self._fixed
