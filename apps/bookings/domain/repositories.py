"""Repository contract for bookings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List
from uuid import UUID

from apps.bookings.domain.entities import Booking


class AbstractBookingRepository(ABC):
    """
    Read/write access to bookings required by the use-cases

    Overlap means ``existing.start < end AND start < existing.end``,
    so bookings that only touch the window are not returned.
    """

    @abstractmethod
    def get_by_id(self, booking_id: UUID) -> Booking | None:
        pass

    @abstractmethod
    def list_overlapping(self, room_id: UUID, start: datetime, end: datetime) -> List[Booking]:
        """Non-cancelled bookings of the room overlapping the window, ordered by start"""

    @abstractmethod
    def has_overlap(
        self,
        room_id: UUID,
        start: datetime,
        end: datetime,
        exclude_id: UUID | None = None,
    ) -> bool:
        """True if a non-cancelled booking (other than ``exclude_id``) overlaps"""

    @abstractmethod
    def add(self, booking: Booking):
        pass

    @abstractmethod
    def update(self, booking: Booking):
        pass

    @abstractmethod
    def list_by_room(self, room_id: UUID, from_inclusive: datetime, to_exclusive: datetime) -> List[Booking]:
        """Bookings of any status overlapping the window, ordered by start"""

    @abstractmethod
    def list_by_requester(self, requester_id: UUID) -> List[Booking]:
        """Bookings made by the requester, newest first"""
