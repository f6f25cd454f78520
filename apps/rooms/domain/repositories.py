"""Repository contract for rooms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from apps.rooms.domain.entities import Room


class AbstractRoomRepository(ABC):
    """Read/write access to rooms required by the use-cases."""

    @abstractmethod
    def get_by_id(self, room_id: UUID, lock: bool = False) -> Room | None:
        """
        Load a room

        With ``lock=True`` the row is locked for the rest of the current
        transaction, which serializes writers that book the same room.
        """

    @abstractmethod
    def get_by_name(self, name: str) -> Room | None:
        """Case-insensitive lookup by name"""

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        """Case-insensitive existence check"""

    @abstractmethod
    def list_active(self) -> List[Room]:
        """Active rooms ordered by name"""

    @abstractmethod
    def add(self, room: Room):
        pass

    @abstractmethod
    def update(self, room: Room):
        pass
