"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Reserve a time window on a room
- ConfirmBookingCommand: Confirm a pending booking
- CancelBookingCommand: Cancel a booking
- RescheduleBookingCommand: Move a booking to another window
- CompleteBookingCommand: Complete a booking once it has ended
"""

from dataclasses import dataclass
from datetime import datetime
from threading import Event
from uuid import UUID
import logging

from shared.application.uow import AbstractUnitOfWork, IsolationLevel
from shared.domain.clock import Clock, system_clock
from shared.domain.exceptions import Conflict, NotFound, ValidationError
from shared.domain.value_objects import TimeRange
from apps.bookings.application.projections import BookingView
from apps.bookings.domain.entities import Booking

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    This is the primary entry point for creating bookings.
    """
    room_id: UUID
    requester_id: UUID
    start: datetime
    end: datetime
    subject: str | None = None


@dataclass
class ConfirmBookingCommand:
    booking_id: UUID


@dataclass
class CancelBookingCommand:
    booking_id: UUID


@dataclass
class RescheduleBookingCommand:
    booking_id: UUID
    new_start: datetime
    new_end: datetime


@dataclass
class CompleteBookingCommand:
    booking_id: UUID


# ===== Command Handlers =====

class BookingCommandHandler:
    """
    Shared wiring for the booking use cases

    Every check-and-write runs in one unit of work:
    1. Start database transaction with the configured isolation level
    2. Lock the room row (SELECT FOR UPDATE) so writers on one room queue up
    3. Reload the booking and run the overlap check on fresh data
    4. Mutate the aggregate (it enforces its own transition rules)
    5. Persist and collect events; they are published after commit
    6. PostgreSQL EXCLUDE constraint as final safety net
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Clock = system_clock,
        isolation_level: IsolationLevel | None = IsolationLevel.SERIALIZABLE,
    ):
        self.uow = uow
        self.clock = clock
        self.isolation_level = isolation_level

    def _load_for_update(self, uow: AbstractUnitOfWork, booking_id: UUID) -> Booking:
        booking = uow.bookings.get_by_id(booking_id)
        if not booking:
            raise NotFound(f"Booking '{booking_id}' was not found.")

        uow.rooms.get_by_id(booking.room_id, lock=True)

        # Another writer may have committed while we waited for the lock
        return uow.bookings.get_by_id(booking_id) or booking

    def _save(self, uow: AbstractUnitOfWork, booking: Booking):
        uow.raise_if_cancelled()
        uow.bookings.update(booking)
        uow.collect_events(booking)


class CreateBookingHandler(BookingCommandHandler):
    """
    Handler for CreateBooking command

    This implements the critical business logic for creating bookings
    with double booking prevention.
    """

    def handle(self, command: CreateBookingCommand, cancel_event: Event | None = None) -> BookingView:
        """
        Handle booking creation

        Returns: BookingView of the new PENDING booking

        Raises:
            ValidationError: missing ids or end <= start
            NotFound: room does not exist
            Conflict: room inactive, end in the past or window taken
        """
        if not command.room_id:
            raise ValidationError("RoomId is required.")
        if not command.requester_id:
            raise ValidationError("CreatedByUserId is required.")

        time_range = TimeRange.create(command.start, command.end)

        logger.info(
            f"Creating booking for room {command.room_id}, "
            f"requester {command.requester_id}, window {time_range}"
        )

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            room = uow.rooms.get_by_id(command.room_id, lock=True)
            if not room:
                raise NotFound(f"Room '{command.room_id}' was not found.")
            if not room.is_active:
                raise Conflict("Room is not active for booking.")

            booking = Booking.create(
                room_id=room.id,
                created_by_user_id=command.requester_id,
                time_range=time_range,
                subject=command.subject,
                clock=self.clock,
            )

            if uow.bookings.has_overlap(room.id, time_range.start, time_range.end):
                raise Conflict("Booking overlaps with an existing booking.")

            uow.raise_if_cancelled()
            uow.bookings.add(booking)
            uow.collect_events(booking)
            # Transaction commits here automatically (__exit__)

        logger.info(f"Booking created successfully (ID: {booking.id})")
        return BookingView.from_booking(booking)


class ConfirmBookingHandler(BookingCommandHandler):

    def handle(self, command: ConfirmBookingCommand, cancel_event: Event | None = None) -> BookingView:
        logger.info(f"Confirming booking {command.booking_id}")

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            booking = self._load_for_update(uow, command.booking_id)

            overlapping = uow.bookings.list_overlapping(
                booking.room_id,
                booking.time_range.start,
                booking.time_range.end,
            )
            booking.confirm(overlapping, clock=self.clock)

            self._save(uow, booking)

        logger.info(f"Booking {booking.id} confirmed successfully")
        return BookingView.from_booking(booking)


class CancelBookingHandler(BookingCommandHandler):
    """Cancelling an already cancelled booking returns it unchanged"""

    def handle(self, command: CancelBookingCommand, cancel_event: Event | None = None) -> BookingView:
        logger.info(f"Cancelling booking {command.booking_id}")

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            booking = self._load_for_update(uow, command.booking_id)

            if booking.is_cancelled:
                logger.info(f"Booking {booking.id} is already cancelled")
                return BookingView.from_booking(booking)

            booking.cancel(clock=self.clock)
            self._save(uow, booking)

        logger.info(f"Booking {booking.id} cancelled successfully")
        return BookingView.from_booking(booking)


class RescheduleBookingHandler(BookingCommandHandler):

    def handle(self, command: RescheduleBookingCommand, cancel_event: Event | None = None) -> BookingView:
        new_range = TimeRange.create(command.new_start, command.new_end)

        logger.info(f"Rescheduling booking {command.booking_id} to {new_range}")

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            booking = self._load_for_update(uow, command.booking_id)

            # The booking's own row is skipped by the aggregate
            existing = uow.bookings.list_overlapping(booking.room_id, new_range.start, new_range.end)
            booking.reschedule(new_range, existing, clock=self.clock)

            self._save(uow, booking)

        logger.info(f"Booking {booking.id} rescheduled, awaiting confirmation")
        return BookingView.from_booking(booking)


class CompleteBookingHandler(BookingCommandHandler):

    def handle(self, command: CompleteBookingCommand, cancel_event: Event | None = None) -> BookingView:
        logger.info(f"Completing booking {command.booking_id}")

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            booking = self._load_for_update(uow, command.booking_id)
            booking.complete(clock=self.clock)

            self._save(uow, booking)

        logger.info(f"Booking {booking.id} completed successfully")
        return BookingView.from_booking(booking)
