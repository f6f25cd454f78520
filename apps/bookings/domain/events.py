"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import TimeRange


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """Event: A new PENDING booking was created"""
    booking_id: UUID
    room_id: UUID
    created_by_user_id: UUID
    time_range: TimeRange


@dataclass(kw_only=True)
class BookingConfirmed(DomainEvent):
    """Event: Booking confirmed (PENDING -> CONFIRMED)"""
    booking_id: UUID
    room_id: UUID
    time_range: TimeRange


@dataclass(kw_only=True)
class BookingRescheduled(DomainEvent):
    """Event: Booking moved to a new window and returned to PENDING"""
    booking_id: UUID
    room_id: UUID
    previous_range: TimeRange
    time_range: TimeRange


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """Event: Booking was cancelled, its window is free again"""
    booking_id: UUID
    room_id: UUID
    old_status: str  # Status before cancellation


@dataclass(kw_only=True)
class BookingCompleted(DomainEvent):
    """Event: Booking window has ended (CONFIRMED -> COMPLETED)"""
    booking_id: UUID
    room_id: UUID
