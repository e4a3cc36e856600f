"""Clock port - abstraction over wall time."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """
    Source of the current time.

    Lets tests inject a fake for deterministic expiry and timestamps.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Returns:
            timezone-aware UTC datetime.
        """
        raise NotImplementedError


class SystemClock(Clock):
    """Real implementation backed by the system clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """Fixed, manually advanced clock for tests."""

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._fixed_time

    def set_time(self, new_time: datetime) -> None:
        self._fixed_time = new_time

    def advance(self, seconds: int = 0, minutes: int = 0, hours: int = 0, days: int = 0) -> None:
        delta = timedelta(seconds=seconds, minutes=minutes, hours=hours, days=days)
        self._fixed_time = self._fixed_time + delta
