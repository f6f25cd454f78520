"""
Room Command Handlers

Use cases that change rooms:
- CreateRoomCommand: Register a new bookable room
- UpdateRoomDetailsCommand: Rename / resize / relocate a room
- SetRoomActiveCommand: Open or close a room for booking
"""

from dataclasses import dataclass
from threading import Event
from uuid import UUID
import logging

from shared.application.uow import AbstractUnitOfWork, IsolationLevel
from shared.domain.clock import Clock, system_clock
from shared.domain.exceptions import Conflict, NotFound
from apps.rooms.application.projections import RoomView
from apps.rooms.domain.entities import Room

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateRoomCommand:
    name: str
    capacity: int
    location: str | None = None


@dataclass
class UpdateRoomDetailsCommand:
    """Replace name, capacity and location of an existing room"""
    room_id: UUID
    name: str
    capacity: int
    location: str | None = None


@dataclass
class SetRoomActiveCommand:
    room_id: UUID
    is_active: bool


# ===== Command Handlers =====

class RoomCommandHandler:
    """Shared wiring for the room use cases"""

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        clock: Clock = system_clock,
        isolation_level: IsolationLevel | None = None,
    ):
        self.uow = uow
        self.clock = clock
        self.isolation_level = isolation_level

    def _load_for_update(self, uow: AbstractUnitOfWork, room_id: UUID) -> Room:
        room = uow.rooms.get_by_id(room_id, lock=True)
        if not room:
            raise NotFound(f"Room '{room_id}' was not found.")
        return room


class CreateRoomHandler(RoomCommandHandler):
    """
    Handler for CreateRoom command

    Room names are unique case-insensitively. The check here gives a
    readable Conflict; the unique index on lower(name) catches the race
    between two concurrent creators.
    """

    def handle(self, command: CreateRoomCommand, cancel_event: Event | None = None) -> RoomView:
        logger.info(f"Creating room '{command.name}' (capacity {command.capacity})")

        # Validates name and capacity before touching the store
        room = Room.create(
            name=command.name,
            capacity=command.capacity,
            location=command.location,
            clock=self.clock,
        )

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            if uow.rooms.exists_by_name(room.name):
                raise Conflict(f"Room with name '{room.name}' already exists.")

            uow.raise_if_cancelled()
            uow.rooms.add(room)

        logger.info(f"Room created: {room.name} (ID: {room.id})")
        return RoomView.from_room(room)


class UpdateRoomDetailsHandler(RoomCommandHandler):

    def handle(self, command: UpdateRoomDetailsCommand, cancel_event: Event | None = None) -> RoomView:
        logger.info(f"Updating room {command.room_id}")

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            room = self._load_for_update(uow, command.room_id)

            if not room.has_name(command.name):
                if uow.rooms.exists_by_name(command.name or ''):
                    raise Conflict(f"Room with name '{command.name.strip()}' already exists.")
                room.rename(command.name, clock=self.clock)

            if room.capacity != command.capacity:
                room.update_capacity(command.capacity, clock=self.clock)

            if room.location != command.location:
                room.update_location(command.location, clock=self.clock)

            uow.raise_if_cancelled()
            uow.rooms.update(room)

        logger.info(f"Room {room.id} updated")
        return RoomView.from_room(room)


class SetRoomActiveHandler(RoomCommandHandler):

    def handle(self, command: SetRoomActiveCommand, cancel_event: Event | None = None) -> RoomView:
        logger.info(f"Setting room {command.room_id} active={command.is_active}")

        with self.uow.begin(self.isolation_level, cancel_event) as uow:
            room = self._load_for_update(uow, command.room_id)
            room.set_active(command.is_active, clock=self.clock)

            uow.raise_if_cancelled()
            uow.rooms.update(room)

        return RoomView.from_room(room)
