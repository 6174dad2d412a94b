"""Mock clock provider for testing."""

from datetime import datetime, timedelta

from dishka import Scope, provide

from ritual.application.clock import Clock
from ritual.util.di.infrastructure.clock import ClockProvider

DEFAULT_NOW = datetime(2026, 3, 10, 12, 0, 0)


class FixedClock(Clock):
    """Clock that only moves when a test moves it."""

    def __init__(self, now: datetime = DEFAULT_NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self._now = self._now + timedelta(days=days, hours=hours)


class MockClockProvider(ClockProvider):
    """Mock clock provider with a settable fixed clock."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_fixed_clock(self) -> FixedClock:
        """Provide the fixed clock so tests can move it."""
        return FixedClock()

    @provide(scope=Scope.APP)
    def get_clock(self, clock: FixedClock) -> Clock:
        """Provide the fixed clock as the engine clock."""
        return clock
