"""API views for rooms."""

from __future__ import annotations

from uuid import UUID

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.application.message_bus import message_bus
from shared.api.routing import UUID_PATTERN
from shared.domain.exceptions import NotFound
from apps.rooms.application.command_handlers import (
    CreateRoomCommand,
    SetRoomActiveCommand,
    UpdateRoomDetailsCommand,
)
from apps.rooms.application.query_handlers import (
    GetRoomByIdQuery,
    GetRoomByNameQuery,
    ListActiveRoomsQuery,
)
from .serializers import RoomActiveSerializer, RoomSerializer, RoomWriteSerializer


class RoomViewSet(viewsets.ViewSet):
    """Управление переговорными комнатами."""

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def get_serializer_class(self):  # type: ignore
        if self.action in ("create", "update"):
            return RoomWriteSerializer
        if self.action == "set_active":
            return RoomActiveSerializer
        return RoomSerializer

    def list(self, request):  # type: ignore
        rooms = message_bus.handle_command(ListActiveRoomsQuery())
        return Response(RoomSerializer(rooms, many=True).data)

    def create(self, request):  # type: ignore
        serializer = RoomWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = message_bus.handle_command(CreateRoomCommand(**serializer.validated_data))
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        room = message_bus.handle_command(GetRoomByIdQuery(room_id=UUID(pk)))
        if room is None:
            raise NotFound(f"Room '{pk}' was not found.")
        return Response(RoomSerializer(room).data)

    def update(self, request, pk=None):  # type: ignore
        serializer = RoomWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = message_bus.handle_command(
            UpdateRoomDetailsCommand(room_id=UUID(pk), **serializer.validated_data)
        )
        return Response(RoomSerializer(room).data)

    @action(detail=False, methods=["get"], url_path=r"by-name/(?P<name>[^/]+)", url_name="by-name")
    def by_name(self, request, name=None):  # type: ignore
        room = message_bus.handle_command(GetRoomByNameQuery(name=name))
        if room is None:
            raise NotFound(f"Room '{name}' was not found.")
        return Response(RoomSerializer(room).data)

    @action(detail=True, methods=["patch"], url_path="active", url_name="active")
    def set_active(self, request, pk=None):  # type: ignore
        serializer = RoomActiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = message_bus.handle_command(
            SetRoomActiveCommand(room_id=UUID(pk), is_active=serializer.validated_data["is_active"])
        )
        return Response(RoomSerializer(room).data)
