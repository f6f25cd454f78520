"""Serializers for the booking API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.domain.entities import SUBJECT_MAX_LENGTH


class BookingSerializer(serializers.Serializer):
    """Read representation of a BookingView."""

    id = serializers.UUIDField(read_only=True)
    room_id = serializers.UUIDField(read_only=True)
    created_by_user_id = serializers.UUIDField(read_only=True)
    subject = serializers.CharField(read_only=True, allow_null=True)
    start = serializers.DateTimeField(read_only=True)
    end = serializers.DateTimeField(read_only=True)
    status = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    status_changed_at = serializers.DateTimeField(read_only=True, allow_null=True)


class BookingCreateSerializer(serializers.Serializer):
    """Request to reserve a window; the requester comes from the token."""

    room_id = serializers.UUIDField()
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()
    subject = serializers.CharField(
        max_length=SUBJECT_MAX_LENGTH,
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None,
    )


class BookingRescheduleSerializer(serializers.Serializer):
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()


class AvailabilityQuerySerializer(serializers.Serializer):
    room_id = serializers.UUIDField()
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()


class BookingWindowQuerySerializer(serializers.Serializer):
    """``?from=...&to=...``; ``from`` is a keyword so fields are built here."""

    def get_fields(self):  # type: ignore
        return {
            "from": serializers.DateTimeField(),
            "to": serializers.DateTimeField(),
        }


class AvailabilitySerializer(serializers.Serializer):
    available = serializers.BooleanField(read_only=True)
