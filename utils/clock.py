"""Calendar/clock provider.

Every due, streak and completion decision asks a ``Clock`` for "now" and for
calendar-day/month comparisons, so the whole engine can be driven by a
``FixedClock`` in tests. Comparisons happen in the clock's timezone, which
must match the timezone the user sees dates in.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta


def _local_timezone() -> tzinfo:
    # Host zone with its DST rules, not the offset in force right now.
    return dateutil_tz.tzlocal()


class Clock:
    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz or _local_timezone()

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()

    def localize(self, value: datetime) -> datetime:
        """Return ``value`` expressed in this clock's timezone.

        Naive datetimes are taken to already be wall-clock time in this zone.
        """
        if value.tzinfo is None:
            return value.replace(tzinfo=self.tz)
        return value.astimezone(self.tz)

    def local_date(self, value: datetime) -> date:
        return self.localize(value).date()

    def same_day(self, a: Optional[datetime], b: Optional[datetime]) -> bool:
        if a is None or b is None:
            return False
        return self.local_date(a) == self.local_date(b)

    def same_month(self, a: Optional[datetime], b: Optional[datetime]) -> bool:
        if a is None or b is None:
            return False
        first, second = self.local_date(a), self.local_date(b)
        return (first.year, first.month) == (second.year, second.month)

    def add_days(self, value: datetime, days: int) -> datetime:
        # Calendar days in local time, so DST shifts don't move the wall clock.
        local = self.localize(value).replace(tzinfo=None) + timedelta(days=days)
        return local.replace(tzinfo=self.tz)

    def add_months(self, value: datetime, months: int) -> datetime:
        local = self.localize(value).replace(tzinfo=None) + relativedelta(months=months)
        return local.replace(tzinfo=self.tz)


class FixedClock(Clock):
    """Clock frozen at a given instant; ``advance`` moves it by calendar units."""

    def __init__(self, instant: datetime, tz: Optional[tzinfo] = None):
        super().__init__(tz or instant.tzinfo)
        self._instant = self.localize(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = self.localize(instant)

    def advance(self, days: int = 0, months: int = 0) -> datetime:
        instant = self._instant
        if months:
            instant = self.add_months(instant, months)
        if days:
            instant = self.add_days(instant, days)
        self._instant = instant
        return instant


def clock_from_config(config: Dict[str, Any]) -> Clock:
    """Build the system clock from the ``[memorization] timezone`` setting."""
    name = config.get("memorization", {}).get("timezone") or "local"
    if name == "local":
        return Clock()
    return Clock(ZoneInfo(name))
