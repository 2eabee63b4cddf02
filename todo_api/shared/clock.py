from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    def __init__(self, fixed_time: datetime) -> None:
        self.fixed_time = fixed_time

    def now(self) -> datetime:
        return self.fixed_time


class IncrementingClock:
    """
    Deterministic clock for tests.

    Every call returns a time one ``step`` later than the previous call, so
    timestamps written by consecutive operations are strictly increasing.
    """

    def __init__(
        self,
        start: Optional[datetime] = None,
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self._current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._step = step

    def now(self) -> datetime:
        current = self._current
        self._current = current + self._step
        return current
