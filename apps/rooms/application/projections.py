"""Read models returned by the room use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from apps.rooms.domain.entities import Room


@dataclass(frozen=True)
class RoomView:
    id: UUID
    name: str
    location: str | None
    capacity: int
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_room(cls, room: Room) -> RoomView:
        return cls(
            id=room.id,
            name=room.name,
            location=room.location,
            capacity=room.capacity,
            is_active=room.is_active,
            created_at=room.created_at,
            updated_at=room.updated_at,
        )
