"""Django ORM implementation of the booking repository."""

from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from django.db.models import Q  # type: ignore

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.repositories import AbstractBookingRepository
from apps.bookings.models import Booking as BookingModel
from shared.domain.value_objects import TimeRange


def booking_from_row(row: BookingModel) -> Booking:
    return Booking(
        id=row.id,
        room_id=row.room_id,
        created_by_user_id=row.created_by_user_id,
        time_range=TimeRange(row.start_at, row.end_at),
        subject=row.subject,
        status=BookingStatus(row.status),
        created_at=row.created_at,
        status_changed_at=row.status_changed_at,
    )


def _overlapping(start: datetime, end: datetime) -> Q:
    # Touching windows (end_at == start) are not an overlap
    return Q(start_at__lt=end) & Q(end_at__gt=start)


class DjangoBookingRepository(AbstractBookingRepository):

    def __init__(self, using: str = "default"):
        self.using = using

    def _queryset(self):
        return BookingModel.objects.using(self.using)

    def _blocking(self, room_id: UUID, start: datetime, end: datetime):
        return (
            self._queryset()
            .filter(room_id=room_id)
            .exclude(status=BookingModel.Status.CANCELLED)
            .filter(_overlapping(start, end))
        )

    def get_by_id(self, booking_id: UUID) -> Booking | None:
        row = self._queryset().filter(pk=booking_id).first()
        return booking_from_row(row) if row else None

    def list_overlapping(self, room_id: UUID, start: datetime, end: datetime) -> List[Booking]:
        rows = self._blocking(room_id, start, end).order_by("start_at")
        return [booking_from_row(row) for row in rows]

    def has_overlap(
        self,
        room_id: UUID,
        start: datetime,
        end: datetime,
        exclude_id: UUID | None = None,
    ) -> bool:
        queryset = self._blocking(room_id, start, end)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        return queryset.exists()

    def add(self, booking: Booking):
        self._queryset().create(
            id=booking.id,
            room_id=booking.room_id,
            created_by_user_id=booking.created_by_user_id,
            subject=booking.subject,
            start_at=booking.time_range.start,
            end_at=booking.time_range.end,
            status=booking.status.value,
            created_at=booking.created_at,
            status_changed_at=booking.status_changed_at,
        )

    def update(self, booking: Booking):
        # room, requester and created_at never change after creation
        self._queryset().filter(pk=booking.id).update(
            subject=booking.subject,
            start_at=booking.time_range.start,
            end_at=booking.time_range.end,
            status=booking.status.value,
            status_changed_at=booking.status_changed_at,
        )

    def list_by_room(self, room_id: UUID, from_inclusive: datetime, to_exclusive: datetime) -> List[Booking]:
        rows = (
            self._queryset()
            .filter(room_id=room_id)
            .filter(_overlapping(from_inclusive, to_exclusive))
            .order_by("start_at")
        )
        return [booking_from_row(row) for row in rows]

    def list_by_requester(self, requester_id: UUID) -> List[Booking]:
        rows = self._queryset().filter(created_by_user_id=requester_id).order_by("-created_at")
        return [booking_from_row(row) for row in rows]
