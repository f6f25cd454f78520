"""Booking use cases and their wiring into the message bus."""


def register_handlers(bus, uow_factory, clock=None, isolation_level=None):
    from shared.application.message_bus import bind_handler
    from shared.application.uow import IsolationLevel
    from shared.domain.clock import system_clock
    from apps.bookings.application import command_handlers as commands
    from apps.bookings.application import query_handlers as queries
    from apps.bookings.application.audit import log_booking_event
    from apps.bookings.domain import events

    clock = clock or system_clock
    isolation_level = isolation_level or IsolationLevel.SERIALIZABLE

    for command_type, handler_class in (
        (commands.CreateBookingCommand, commands.CreateBookingHandler),
        (commands.ConfirmBookingCommand, commands.ConfirmBookingHandler),
        (commands.CancelBookingCommand, commands.CancelBookingHandler),
        (commands.RescheduleBookingCommand, commands.RescheduleBookingHandler),
        (commands.CompleteBookingCommand, commands.CompleteBookingHandler),
    ):
        bus.register_command_handler(
            command_type,
            bind_handler(handler_class, uow_factory, clock=clock, isolation_level=isolation_level),
        )

    for query_type, handler_class in (
        (queries.CheckAvailabilityQuery, queries.CheckAvailabilityHandler),
        (queries.GetBookingByIdQuery, queries.GetBookingByIdHandler),
        (queries.ListBookingsForRoomQuery, queries.ListBookingsForRoomHandler),
        (queries.ListMyBookingsQuery, queries.ListMyBookingsHandler),
    ):
        bus.register_command_handler(query_type, bind_handler(handler_class, uow_factory))

    for event_type in (
        events.BookingCreated,
        events.BookingConfirmed,
        events.BookingRescheduled,
        events.BookingCancelled,
        events.BookingCompleted,
    ):
        bus.register_event_handler(event_type, log_booking_event)
