"""Room use cases and their wiring into the message bus."""


def register_handlers(bus, uow_factory, clock=None):
    from shared.application.message_bus import bind_handler
    from shared.domain.clock import system_clock
    from apps.rooms.application import command_handlers as commands
    from apps.rooms.application import query_handlers as queries

    clock = clock or system_clock

    bus.register_command_handler(
        commands.CreateRoomCommand,
        bind_handler(commands.CreateRoomHandler, uow_factory, clock=clock),
    )
    bus.register_command_handler(
        commands.UpdateRoomDetailsCommand,
        bind_handler(commands.UpdateRoomDetailsHandler, uow_factory, clock=clock),
    )
    bus.register_command_handler(
        commands.SetRoomActiveCommand,
        bind_handler(commands.SetRoomActiveHandler, uow_factory, clock=clock),
    )

    bus.register_command_handler(queries.GetRoomByIdQuery, bind_handler(queries.GetRoomByIdHandler, uow_factory))
    bus.register_command_handler(queries.GetRoomByNameQuery, bind_handler(queries.GetRoomByNameHandler, uow_factory))
    bus.register_command_handler(queries.ListActiveRoomsQuery, bind_handler(queries.ListActiveRoomsHandler, uow_factory))
