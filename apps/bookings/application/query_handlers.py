"""
Booking Query Handlers

Read-only use cases. They use plain (non-locking) reads.
"""

from dataclasses import dataclass
from datetime import datetime
from threading import Event
from typing import List
from uuid import UUID
import logging

from shared.application.uow import AbstractUnitOfWork
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import TimeRange
from apps.bookings.application.projections import BookingView

logger = logging.getLogger(__name__)


@dataclass
class CheckAvailabilityQuery:
    room_id: UUID
    start: datetime
    end: datetime


@dataclass
class GetBookingByIdQuery:
    booking_id: UUID


@dataclass
class ListBookingsForRoomQuery:
    room_id: UUID
    from_inclusive: datetime
    to_exclusive: datetime


@dataclass
class ListMyBookingsQuery:
    requester_id: UUID


class BookingQueryHandler:

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow


class CheckAvailabilityHandler(BookingQueryHandler):
    """
    Availability of a room for a window

    Answers False, not an error, for rooms that do not exist or are
    inactive. A malformed window is a ValidationError.
    """

    def handle(self, query: CheckAvailabilityQuery, cancel_event: Event | None = None) -> bool:
        if not query.room_id:
            raise ValidationError("RoomId is required.")

        requested = TimeRange.create(query.start, query.end)

        with self.uow.begin(cancel_event=cancel_event) as uow:
            room = uow.rooms.get_by_id(query.room_id)
            if not room:
                return False
            existing = uow.bookings.list_overlapping(room.id, requested.start, requested.end)

        available = room.is_available(requested, existing)
        logger.debug(f"Room {room.id} available for {requested}: {available}")
        return available


class GetBookingByIdHandler(BookingQueryHandler):

    def handle(self, query: GetBookingByIdQuery, cancel_event: Event | None = None) -> BookingView | None:
        with self.uow.begin(cancel_event=cancel_event) as uow:
            booking = uow.bookings.get_by_id(query.booking_id)
        return BookingView.from_booking(booking) if booking else None


class ListBookingsForRoomHandler(BookingQueryHandler):
    """All bookings of a room touching [from, to), any status, by start"""

    def handle(self, query: ListBookingsForRoomQuery, cancel_event: Event | None = None) -> List[BookingView]:
        if not query.room_id:
            raise ValidationError("RoomId is required.")
        window = TimeRange.create(query.from_inclusive, query.to_exclusive)

        with self.uow.begin(cancel_event=cancel_event) as uow:
            bookings = uow.bookings.list_by_room(query.room_id, window.start, window.end)
        return [BookingView.from_booking(b) for b in bookings]


class ListMyBookingsHandler(BookingQueryHandler):

    def handle(self, query: ListMyBookingsQuery, cancel_event: Event | None = None) -> List[BookingView]:
        if not query.requester_id:
            raise ValidationError("RequesterId is required.")

        with self.uow.begin(cancel_event=cancel_event) as uow:
            bookings = uow.bookings.list_by_requester(query.requester_id)
        return [BookingView.from_booking(b) for b in bookings]
