"""
Common Value Objects

Value objects used across multiple domains:
- TimeRange: Represents a time window (booking start to booking end)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from shared.domain.base import ValueObject
from shared.domain.exceptions import InvalidInterval


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Time range value object

    Represents the window from ``start`` to ``end`` of a booking.
    Both bounds are timezone-aware and ``end`` is strictly after ``start``.
    Stored as two columns on the owning row, it has no identity of its own.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        # Validation
        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            raise InvalidInterval("TimeRange bounds must be datetimes")
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise InvalidInterval("TimeRange bounds must be timezone-aware")
        if self.end <= self.start:
            raise InvalidInterval(f"End ({self.end}) must be greater than Start ({self.start})")

    @classmethod
    def create(cls, start: datetime, end: datetime) -> 'TimeRange':
        """Build a range, failing with InvalidInterval when end <= start"""
        return cls(start, end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: 'TimeRange') -> bool:
        """
        Check if this range overlaps with another

        Two ranges overlap if they share an instant that is not merely a
        shared boundary point, so back-to-back bookings do not overlap.

        Examples:
            - 10:00-11:00 overlaps with 10:30-11:30 -> True
            - 10:00-11:00 overlaps with 11:00-12:00 -> False (adjacent)
        """
        if not isinstance(other, TimeRange):
            raise TypeError("Can only check overlap with another TimeRange")

        # Overlap formula: start1 < end2 AND start2 < end1
        return self.start < other.end and other.start < self.end

    def contains(self, instant: datetime) -> bool:
        """
        Check if an instant is within this range

        Note: both bounds are inclusive
        """
        return self.start <= instant <= self.end

    def shift(self, delta: timedelta) -> 'TimeRange':
        """Move both bounds by a signed duration"""
        return TimeRange(self.start + delta, self.end + delta)

    def expand(self, delta: timedelta) -> 'TimeRange':
        """Move only the end bound by a signed duration"""
        return TimeRange(self.start, self.end + delta)

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"TimeRange({self.start.isoformat()}, {self.end.isoformat()})"
