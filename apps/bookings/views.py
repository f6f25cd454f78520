"""API views for the booking domain."""

from __future__ import annotations

from uuid import UUID

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.authentication import requester_id
from shared.api.routing import UUID_PATTERN
from shared.application.message_bus import message_bus
from shared.domain.exceptions import NotFound
from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CompleteBookingCommand,
    ConfirmBookingCommand,
    CreateBookingCommand,
    RescheduleBookingCommand,
)
from apps.bookings.application.query_handlers import (
    CheckAvailabilityQuery,
    GetBookingByIdQuery,
    ListBookingsForRoomQuery,
    ListMyBookingsQuery,
)
from .serializers import (
    AvailabilityQuerySerializer,
    AvailabilitySerializer,
    BookingCreateSerializer,
    BookingRescheduleSerializer,
    BookingSerializer,
    BookingWindowQuerySerializer,
)


class BookingViewSet(viewsets.ViewSet):
    """Viewset для создания и управления бронированиями."""

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "reschedule":
            return BookingRescheduleSerializer
        if self.action == "availability":
            return AvailabilitySerializer
        return BookingSerializer

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = message_bus.handle_command(
            CreateBookingCommand(
                room_id=data["room_id"],
                requester_id=requester_id(request),
                start=data["start"],
                end=data["end"],
                subject=data.get("subject"),
            )
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = message_bus.handle_command(GetBookingByIdQuery(booking_id=UUID(pk)))
        if booking is None:
            raise NotFound(f"Booking '{pk}' was not found.")
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=["get"], url_path="my", url_name="my")
    def my(self, request):  # type: ignore
        bookings = message_bus.handle_command(ListMyBookingsQuery(requester_id=requester_id(request)))
        return Response(BookingSerializer(bookings, many=True).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=rf"room/(?P<room_id>{UUID_PATTERN})",
        url_name="for-room",
    )
    def for_room(self, request, room_id=None):  # type: ignore
        window = BookingWindowQuerySerializer(data=request.query_params)
        window.is_valid(raise_exception=True)
        bookings = message_bus.handle_command(
            ListBookingsForRoomQuery(
                room_id=UUID(room_id),
                from_inclusive=window.validated_data["from"],
                to_exclusive=window.validated_data["to"],
            )
        )
        return Response(BookingSerializer(bookings, many=True).data)

    @action(detail=False, methods=["get"], url_path="availability", url_name="availability")
    def availability(self, request):  # type: ignore
        params = AvailabilityQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        available = message_bus.handle_command(CheckAvailabilityQuery(**params.validated_data))
        return Response(AvailabilitySerializer({"available": available}).data)

    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):  # type: ignore
        booking = message_bus.handle_command(ConfirmBookingCommand(booking_id=UUID(pk)))
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = message_bus.handle_command(CancelBookingCommand(booking_id=UUID(pk)))
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        booking = message_bus.handle_command(CompleteBookingCommand(booking_id=UUID(pk)))
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["patch"])
    def reschedule(self, request, pk=None):  # type: ignore
        serializer = BookingRescheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = message_bus.handle_command(
            RescheduleBookingCommand(
                booking_id=UUID(pk),
                new_start=serializer.validated_data["start"],
                new_end=serializer.validated_data["end"],
            )
        )
        return Response(BookingSerializer(booking).data)
