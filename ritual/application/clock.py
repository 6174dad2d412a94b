"""Wall clock used for calendar-day bucketing."""

from abc import ABC, abstractmethod
from datetime import datetime

from ritual.domain.value import DateKey, date_key


class Clock(ABC):
    """Source of the current local time."""

    @abstractmethod
    def now(self) -> datetime:
        pass

    def today(self) -> DateKey:
        """Local calendar day as a date key."""
        return date_key(self.now())


class SystemClock(Clock):
    """Local system time."""

    def now(self) -> datetime:
        return datetime.now().astimezone()
