from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from app.core.config import settings


class Clock:
    """Wall clock used for timestamps and overdue checks."""

    def __init__(self, tz_name: str | None = None):
        self.tz = ZoneInfo(tz_name or settings.TIMEZONE)

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        """Current calendar date in the configured timezone."""
        return self.now().astimezone(self.tz).date()


clock = Clock()


def get_clock() -> Clock:
    return clock
