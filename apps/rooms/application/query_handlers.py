"""
Room Query Handlers

Read-only use cases. They run without row locks.
"""

from dataclasses import dataclass
from threading import Event
from typing import List
from uuid import UUID

from shared.application.uow import AbstractUnitOfWork
from shared.domain.exceptions import ValidationError
from apps.rooms.application.projections import RoomView


@dataclass
class GetRoomByIdQuery:
    room_id: UUID


@dataclass
class GetRoomByNameQuery:
    name: str


@dataclass
class ListActiveRoomsQuery:
    pass


class RoomQueryHandler:

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow


class GetRoomByIdHandler(RoomQueryHandler):

    def handle(self, query: GetRoomByIdQuery, cancel_event: Event | None = None) -> RoomView | None:
        with self.uow.begin(cancel_event=cancel_event) as uow:
            room = uow.rooms.get_by_id(query.room_id)
        return RoomView.from_room(room) if room else None


class GetRoomByNameHandler(RoomQueryHandler):
    """Case-insensitive lookup"""

    def handle(self, query: GetRoomByNameQuery, cancel_event: Event | None = None) -> RoomView | None:
        if not query.name or not query.name.strip():
            raise ValidationError("Room name is required.")

        with self.uow.begin(cancel_event=cancel_event) as uow:
            room = uow.rooms.get_by_name(query.name)
        return RoomView.from_room(room) if room else None


class ListActiveRoomsHandler(RoomQueryHandler):

    def handle(self, query: ListActiveRoomsQuery, cancel_event: Event | None = None) -> List[RoomView]:
        with self.uow.begin(cancel_event=cancel_event) as uow:
            rooms = uow.rooms.list_active()
        return [RoomView.from_room(room) for room in rooms]
