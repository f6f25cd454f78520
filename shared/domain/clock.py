"""
Clock capability

Aggregates never read wall-clock time directly; they ask a Clock.
Production code uses ``system_clock``; tests pin time with FixedClock.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from shared.domain.exceptions import ValidationError


class Clock(ABC):
    """Source of the current instant (always timezone-aware)."""

    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        if now.tzinfo is None:
            raise ValidationError("FixedClock requires a timezone-aware datetime")
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime):
        self._now = now

    def advance(self, delta: timedelta):
        self._now = self._now + delta


system_clock = SystemClock()
