"""
Clock -- where payment dates come from.

PaymentOrchestrator stamps ``Job.payment_date`` with ``clock.now()`` and never
calls ``datetime.now()`` itself, so tests can pin the date a job was paid.
Every clock returns timezone-aware UTC datetimes; the report windows compare
payment dates in UTC.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        raise ValueError(f"Clock times must be timezone-aware, got {value!r}")
    return value.astimezone(timezone.utc)


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Current time, timezone-aware UTC."""


class SystemClock(Clock):
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    A clock that only moves when told to.

    Starts at 2024-01-01 12:00 UTC unless given ``start``.  Aware times in
    other zones are converted to UTC; naive times are rejected.
    """

    DEFAULT_START = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __init__(self, start: datetime | None = None):
        self._current = _as_utc(start or self.DEFAULT_START)

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = _as_utc(time)

    def advance(self, by: int | timedelta = 1) -> None:
        """Move forward by ``by`` seconds, or by a timedelta."""
        step = by if isinstance(by, timedelta) else timedelta(seconds=by)
        if step < timedelta(0):
            raise ValueError("DeterministicClock cannot move backwards")
        self._current += step
