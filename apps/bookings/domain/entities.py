"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a room reservation
- BookingStatus: FSM states for booking lifecycle
- BookingAction: events that drive the FSM
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, Tuple
from uuid import UUID

from shared.domain.base import Aggregate
from shared.domain.clock import Clock, system_clock
from shared.domain.exceptions import Conflict, InvalidTransition, ValidationError
from shared.domain.value_objects import TimeRange

SUBJECT_MAX_LENGTH = 200


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (no overlapping booking for the room)
    - PENDING/CONFIRMED -> PENDING (rescheduled, must be reconfirmed)
    - PENDING/CONFIRMED -> CANCELLED (cancelled by requester)
    - CONFIRMED -> COMPLETED (time window has ended)
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class BookingAction(Enum):
    CONFIRM = 'confirm'
    RESCHEDULE = 'reschedule'
    CANCEL = 'cancel'
    COMPLETE = 'complete'


TRANSITIONS: Dict[Tuple[BookingStatus, BookingAction], BookingStatus] = {
    (BookingStatus.PENDING, BookingAction.CONFIRM): BookingStatus.CONFIRMED,
    (BookingStatus.PENDING, BookingAction.RESCHEDULE): BookingStatus.PENDING,
    (BookingStatus.CONFIRMED, BookingAction.RESCHEDULE): BookingStatus.PENDING,
    (BookingStatus.PENDING, BookingAction.CANCEL): BookingStatus.CANCELLED,
    (BookingStatus.CONFIRMED, BookingAction.CANCEL): BookingStatus.CANCELLED,
    (BookingStatus.CONFIRMED, BookingAction.COMPLETE): BookingStatus.COMPLETED,
}


def _clean_subject(subject: str | None) -> str | None:
    if subject is None or not subject.strip():
        return None
    if len(subject) > SUBJECT_MAX_LENGTH:
        raise ValidationError(f"Subject must be at most {SUBJECT_MAX_LENGTH} characters.")
    return subject.strip()


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Ties a room, a requester and a time window together.
    The room is referenced by id only; the booking owns its TimeRange.

    Key invariants:
    - Time range end is strictly after start (guaranteed by TimeRange)
    - End is in the future when the booking is created or moved
    - Status changes only through the TRANSITIONS table
    - Subject is at most 200 characters
    """

    room_id: UUID
    created_by_user_id: UUID
    time_range: TimeRange
    subject: str | None = None
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime
    status_changed_at: datetime | None = None

    def __post_init__(self):
        if self.room_id is None:
            raise ValidationError("RoomId is required.")
        if self.created_by_user_id is None:
            raise ValidationError("CreatedByUserId is required.")
        if not isinstance(self.time_range, TimeRange):
            raise ValidationError("TimeRange is required.")
        self.subject = _clean_subject(self.subject)

    @classmethod
    def create(
        cls,
        room_id: UUID,
        created_by_user_id: UUID,
        time_range: TimeRange,
        subject: str | None = None,
        clock: Clock = system_clock,
    ) -> Booking:
        """
        Create a new PENDING booking

        Raises:
            Conflict: if the time range has already ended
        """
        now = clock.now()
        if time_range is not None and time_range.end <= now:
            raise Conflict("Booking end must be in the future.")

        booking = cls(
            room_id=room_id,
            created_by_user_id=created_by_user_id,
            time_range=time_range,
            subject=subject,
            status=BookingStatus.PENDING,
            created_at=now,
        )

        from apps.bookings.domain.events import BookingCreated

        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            occurred_at=now,
            booking_id=booking.id,
            room_id=booking.room_id,
            created_by_user_id=booking.created_by_user_id,
            time_range=booking.time_range,
        ))
        return booking

    def confirm(self, existing_bookings: Iterable[Booking] | None = None, clock: Clock = system_clock):
        """
        Confirm booking (PENDING -> CONFIRMED)

        ``existing_bookings`` are freshly loaded bookings of the room; the
        booking itself and cancelled ones are ignored.
        Events: BookingConfirmed
        """
        target = self._next_status(BookingAction.CONFIRM)

        if self._overlaps_any(existing_bookings, self.time_range):
            raise Conflict("Cannot confirm due to overlap with another booking.")

        from apps.bookings.domain.events import BookingConfirmed

        now = clock.now()
        self._set_status(target, now)
        self.add_event(BookingConfirmed(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            room_id=self.room_id,
            time_range=self.time_range,
        ))

    def reschedule(
        self,
        new_range: TimeRange,
        existing_bookings: Iterable[Booking] | None = None,
        clock: Clock = system_clock,
    ):
        """
        Move booking to a new window (PENDING/CONFIRMED -> PENDING)

        A confirmed booking that moves has to be confirmed again.
        Events: BookingRescheduled
        """
        if not isinstance(new_range, TimeRange):
            raise ValidationError("New time range is required.")

        target = self._next_status(BookingAction.RESCHEDULE)

        now = clock.now()
        if new_range.end <= now:
            raise InvalidTransition("New schedule must end in the future.")

        if self._overlaps_any(existing_bookings, new_range):
            raise Conflict("Cannot reschedule due to overlap with another booking.")

        from apps.bookings.domain.events import BookingRescheduled

        previous_range = self.time_range
        self.time_range = new_range
        self._set_status(target, now)
        self.add_event(BookingRescheduled(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            room_id=self.room_id,
            previous_range=previous_range,
            time_range=new_range,
        ))

    def cancel(self, clock: Clock = system_clock):
        """
        Cancel booking

        Idempotent: cancelling a cancelled booking changes nothing.
        Completed bookings cannot be cancelled.
        Events: BookingCancelled
        """
        if self.status == BookingStatus.CANCELLED:
            return

        target = self._next_status(BookingAction.CANCEL)

        from apps.bookings.domain.events import BookingCancelled

        now = clock.now()
        old_status = self.status
        self._set_status(target, now)
        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            room_id=self.room_id,
            old_status=old_status.value,
        ))

    def complete(self, clock: Clock = system_clock):
        """
        Complete booking (CONFIRMED -> COMPLETED)

        Only allowed once the time window has ended.
        Events: BookingCompleted
        """
        target = self._next_status(BookingAction.COMPLETE)

        now = clock.now()
        if now < self.time_range.end:
            raise InvalidTransition("Cannot complete booking before it ends.")

        from apps.bookings.domain.events import BookingCompleted

        self._set_status(target, now)
        self.add_event(BookingCompleted(
            aggregate_id=self.id,
            occurred_at=now,
            booking_id=self.id,
            room_id=self.room_id,
        ))

    def update_subject(self, subject: str | None):
        self.subject = _clean_subject(subject)

    def can(self, action: BookingAction) -> bool:
        return (self.status, action) in TRANSITIONS

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    def _next_status(self, action: BookingAction) -> BookingStatus:
        target = TRANSITIONS.get((self.status, action))
        if target is None:
            raise InvalidTransition(
                f"Cannot {action.value} booking with status {self.status.value}."
            )
        return target

    def _overlaps_any(self, bookings: Iterable[Booking] | None, time_range: TimeRange) -> bool:
        return any(
            b.id != self.id
            and b.room_id == self.room_id
            and not b.is_cancelled
            and b.time_range.overlaps(time_range)
            for b in (bookings or ())
        )

    def _set_status(self, status: BookingStatus, now: datetime):
        self.status = status
        self.status_changed_at = now

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, room_id={self.room_id}, "
            f"status={self.status.value}, time_range={self.time_range!r})"
        )
