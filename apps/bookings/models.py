"""Booking persistence models."""

from __future__ import annotations

import uuid

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """
    Reservation of a room for a time window

    The domain TimeRange is stored as ``start_at``/``end_at``. On
    PostgreSQL an exclusion constraint (see migration 0002) rejects two
    non-cancelled rows of one room with overlapping windows.
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.RESTRICT,
        related_name="bookings",
    )
    created_by_user_id = models.UUIDField()
    subject = models.CharField(max_length=200, null=True, blank=True)
    start_at = models.DateTimeField()
    end_at = models.DateTimeField()
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    created_at = models.DateTimeField()
    status_changed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["start_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_at__gt=models.F("start_at")),
                name="booking_valid_time_range",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "status"], name="bookings_bo_room_id_4f1a7c_idx"),
            models.Index(fields=["room", "start_at", "end_at"], name="bookings_bo_room_id_9b3e20_idx"),
            models.Index(fields=["created_by_user_id"], name="bookings_bo_created_d52a81_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.id} for room {self.room_id} ({self.status})"
