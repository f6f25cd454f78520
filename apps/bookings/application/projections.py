"""Read models returned by the booking use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from apps.bookings.domain.entities import Booking


@dataclass(frozen=True)
class BookingView:
    id: UUID
    room_id: UUID
    created_by_user_id: UUID
    subject: str | None
    start: datetime
    end: datetime
    status: str
    created_at: datetime
    status_changed_at: datetime | None = None

    @classmethod
    def from_booking(cls, booking: Booking) -> BookingView:
        return cls(
            id=booking.id,
            room_id=booking.room_id,
            created_by_user_id=booking.created_by_user_id,
            subject=booking.subject,
            start=booking.time_range.start,
            end=booking.time_range.end,
            status=booking.status.value,
            created_at=booking.created_at,
            status_changed_at=booking.status_changed_at,
        )
