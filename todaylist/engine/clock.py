"""Current-time sources.

Production code asks a clock for "now" instead of calling ``datetime.now()``
directly, so tests can pin the time.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from dateutil.tz import tzlocal


class SystemClock:
    """Wall clock in a fixed timezone.

    Without an explicit zone the system local zone is used through
    ``dateutil.tz.tzlocal``, which follows daylight saving transitions, so
    day arithmetic on the returned value lands on local wall-clock hours.
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz if tz is not None else tzlocal()

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Clock that returns a preset instant until told otherwise."""

    def __init__(self, fixed: datetime):
        self.fixed = fixed

    def now(self) -> datetime:
        return self.fixed

    def set(self, fixed: datetime) -> None:
        self.fixed = fixed

    def advance(self, delta: timedelta) -> None:
        self.fixed = self.fixed + delta
