"""
Room Domain Entities

- Room: a bookable resource with a fixed seat count and an active flag
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Iterable

from shared.domain.base import Entity
from shared.domain.clock import Clock, system_clock
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import TimeRange

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.bookings.domain.entities import Booking

NAME_MAX_LENGTH = 100
LOCATION_MAX_LENGTH = 200


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Room name is required.")
    name = name.strip()
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Room name must be at most {NAME_MAX_LENGTH} characters.")
    return name


def _clean_location(location: str | None) -> str | None:
    if location is None or not location.strip():
        return None
    location = location.strip()
    if len(location) > LOCATION_MAX_LENGTH:
        raise ValidationError(f"Location must be at most {LOCATION_MAX_LENGTH} characters.")
    return location


def _check_capacity(capacity: int):
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ValidationError("Capacity must be greater than zero.")


@dataclass(eq=False, kw_only=True)
class Room(Entity):
    """
    Room Entity

    Fields are only changed through the mutation methods below, each of
    which validates its input and touches ``updated_at``.

    Key invariants:
    - Name is non-empty (names are unique case-insensitively, enforced by
      the use-cases and the store)
    - Capacity is a positive integer
    """

    name: str
    capacity: int
    location: str | None = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime | None = None

    def __post_init__(self):
        self.name = _clean_name(self.name)
        self.location = _clean_location(self.location)
        _check_capacity(self.capacity)

    @classmethod
    def create(
        cls,
        name: str,
        capacity: int,
        location: str | None = None,
        clock: Clock = system_clock,
    ) -> Room:
        """Factory for new rooms; new rooms start active"""
        return cls(
            name=name,
            capacity=capacity,
            location=location,
            is_active=True,
            created_at=clock.now(),
        )

    def rename(self, new_name: str, clock: Clock = system_clock):
        self.name = _clean_name(new_name)
        self._touch(clock)

    def update_capacity(self, capacity: int, clock: Clock = system_clock):
        _check_capacity(capacity)
        self.capacity = capacity
        self._touch(clock)

    def update_location(self, location: str | None, clock: Clock = system_clock):
        self.location = _clean_location(location)
        self._touch(clock)

    def set_active(self, active: bool, clock: Clock = system_clock):
        self.is_active = bool(active)
        self._touch(clock)

    def has_name(self, name: str) -> bool:
        """Case-insensitive name comparison"""
        return self.name.casefold() == (name or '').strip().casefold()

    def is_available(self, requested: TimeRange, existing_bookings: Iterable[Booking] | None) -> bool:
        """
        Check availability against the given bookings

        Inactive rooms are never available. Cancelled bookings are ignored.
        A booking that merely touches the requested window (one ends exactly
        when the other starts) does not block it.
        """
        if not self.is_active:
            return False
        if requested is None:
            raise ValidationError("requested time range is required")

        active_bookings = (b for b in (existing_bookings or ()) if not b.is_cancelled)
        return not any(b.time_range.overlaps(requested) for b in active_bookings)

    def _touch(self, clock: Clock):
        self.updated_at = clock.now()

    def __str__(self):
        return f"Room {self.name} ({self.capacity} seats)"
