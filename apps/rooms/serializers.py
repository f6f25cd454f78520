"""Serializers for the room API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.rooms.domain.entities import LOCATION_MAX_LENGTH, NAME_MAX_LENGTH


class RoomSerializer(serializers.Serializer):
    """Read representation of a RoomView."""

    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    location = serializers.CharField(read_only=True, allow_null=True)
    capacity = serializers.IntegerField(read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True, allow_null=True)


class RoomWriteSerializer(serializers.Serializer):
    """Payload for creating a room or replacing its details.

    Only the shape is checked here; the Room entity owns the rules for
    names and capacity.
    """

    name = serializers.CharField(max_length=NAME_MAX_LENGTH, allow_blank=True, trim_whitespace=False)
    capacity = serializers.IntegerField()
    location = serializers.CharField(
        max_length=LOCATION_MAX_LENGTH,
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None,
    )


class RoomActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()
