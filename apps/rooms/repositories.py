"""Django ORM implementation of the room repository."""

from __future__ import annotations

from typing import List
from uuid import UUID

from apps.rooms.domain.entities import Room
from apps.rooms.domain.repositories import AbstractRoomRepository
from apps.rooms.models import Room as RoomModel
from shared.infrastructure.db import lock_queryset_if_possible


def room_from_row(row: RoomModel) -> Room:
    return Room(
        id=row.id,
        name=row.name,
        capacity=row.capacity,
        location=row.location,
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoRoomRepository(AbstractRoomRepository):

    def __init__(self, using: str = "default"):
        self.using = using

    def _queryset(self):
        return RoomModel.objects.using(self.using)

    def get_by_id(self, room_id: UUID, lock: bool = False) -> Room | None:
        queryset = self._queryset().filter(pk=room_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset, using=self.using)
        row = queryset.first()
        return room_from_row(row) if row else None

    def get_by_name(self, name: str) -> Room | None:
        row = self._queryset().filter(name__iexact=name.strip()).first()
        return room_from_row(row) if row else None

    def exists_by_name(self, name: str) -> bool:
        return self._queryset().filter(name__iexact=name.strip()).exists()

    def list_active(self) -> List[Room]:
        rows = self._queryset().filter(is_active=True).order_by("name")
        return [room_from_row(row) for row in rows]

    def add(self, room: Room):
        self._queryset().create(
            id=room.id,
            name=room.name,
            location=room.location,
            capacity=room.capacity,
            is_active=room.is_active,
            created_at=room.created_at,
            updated_at=room.updated_at,
        )

    def update(self, room: Room):
        self._queryset().filter(pk=room.id).update(
            name=room.name,
            location=room.location,
            capacity=room.capacity,
            is_active=room.is_active,
            updated_at=room.updated_at,
        )
