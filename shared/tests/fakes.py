"""In-memory unit of work for handler tests.

One re-entrant lock guards the whole store and is held for the duration
of a unit of work, so units of work on the same store run one after the
other just like serializable transactions. Writes are checked against
the same rules as the database constraints (unique room name, no
overlapping non-cancelled bookings per room) and report violations as
ConcurrencyConflict, the way DjangoUnitOfWork reports IntegrityError.
"""

from __future__ import annotations

import threading
from copy import deepcopy
from datetime import datetime
from typing import Dict, List
from uuid import UUID

from apps.bookings.domain.entities import Booking
from apps.bookings.domain.repositories import AbstractBookingRepository
from apps.rooms.domain.entities import Room
from apps.rooms.domain.repositories import AbstractRoomRepository
from shared.application.uow import AbstractUnitOfWork
from shared.domain.base import DomainEvent
from shared.domain.exceptions import ConcurrencyConflict
from shared.domain.value_objects import TimeRange


def _detached(aggregate):
    copy = deepcopy(aggregate)
    if hasattr(copy, "clear_events"):
        copy.clear_events()
    return copy


class InMemoryStore:

    def __init__(self):
        self.rooms: Dict[UUID, Room] = {}
        self.bookings: Dict[UUID, Booking] = {}
        self.published: List[DomainEvent] = []
        self.lock = threading.RLock()
        self.commits = 0
        self.rollbacks = 0


class InMemoryRoomRepository(AbstractRoomRepository):

    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_by_id(self, room_id: UUID, lock: bool = False) -> Room | None:
        room = self.store.rooms.get(room_id)
        return _detached(room) if room else None

    def get_by_name(self, name: str) -> Room | None:
        for room in self.store.rooms.values():
            if room.has_name(name):
                return _detached(room)
        return None

    def exists_by_name(self, name: str) -> bool:
        return any(room.has_name(name) for room in self.store.rooms.values())

    def list_active(self) -> List[Room]:
        rooms = [r for r in self.store.rooms.values() if r.is_active]
        return [_detached(r) for r in sorted(rooms, key=lambda r: r.name)]

    def add(self, room: Room):
        self._check_unique_name(room)
        self.store.rooms[room.id] = _detached(room)

    def update(self, room: Room):
        self._check_unique_name(room)
        self.store.rooms[room.id] = _detached(room)

    def _check_unique_name(self, room: Room):
        for other in self.store.rooms.values():
            if other.id != room.id and other.has_name(room.name):
                raise ConcurrencyConflict("duplicate key value violates unique constraint \"room_name_ci_unique\"")


class InMemoryBookingRepository(AbstractBookingRepository):

    def __init__(self, store: InMemoryStore):
        self.store = store

    def _blocking(self, room_id: UUID, start: datetime, end: datetime) -> List[Booking]:
        window = TimeRange(start, end)
        return sorted(
            (
                b for b in self.store.bookings.values()
                if b.room_id == room_id and not b.is_cancelled and b.time_range.overlaps(window)
            ),
            key=lambda b: b.time_range.start,
        )

    def get_by_id(self, booking_id: UUID) -> Booking | None:
        booking = self.store.bookings.get(booking_id)
        return _detached(booking) if booking else None

    def list_overlapping(self, room_id: UUID, start: datetime, end: datetime) -> List[Booking]:
        return [_detached(b) for b in self._blocking(room_id, start, end)]

    def has_overlap(
        self,
        room_id: UUID,
        start: datetime,
        end: datetime,
        exclude_id: UUID | None = None,
    ) -> bool:
        return any(b.id != exclude_id for b in self._blocking(room_id, start, end))

    def add(self, booking: Booking):
        self._check_exclusion(booking)
        self.store.bookings[booking.id] = _detached(booking)

    def update(self, booking: Booking):
        self._check_exclusion(booking)
        self.store.bookings[booking.id] = _detached(booking)

    def list_by_room(self, room_id: UUID, from_inclusive: datetime, to_exclusive: datetime) -> List[Booking]:
        window = TimeRange(from_inclusive, to_exclusive)
        bookings = [
            b for b in self.store.bookings.values()
            if b.room_id == room_id and b.time_range.overlaps(window)
        ]
        return [_detached(b) for b in sorted(bookings, key=lambda b: b.time_range.start)]

    def list_by_requester(self, requester_id: UUID) -> List[Booking]:
        bookings = [b for b in self.store.bookings.values() if b.created_by_user_id == requester_id]
        return [_detached(b) for b in sorted(bookings, key=lambda b: b.created_at, reverse=True)]

    def _check_exclusion(self, booking: Booking):
        if booking.is_cancelled:
            return
        window = booking.time_range
        if any(b.id != booking.id for b in self._blocking(booking.room_id, window.start, window.end)):
            raise ConcurrencyConflict("conflicting key value violates exclusion constraint \"booking_room_no_overlap\"")


class InMemoryUnitOfWork(AbstractUnitOfWork):

    def __init__(self, store: InMemoryStore | None = None):
        super().__init__()
        self.store = store or InMemoryStore()
        self.rooms = InMemoryRoomRepository(self.store)
        self.bookings = InMemoryBookingRepository(self.store)
        self._snapshot = None
        self.last_isolation_level = None

    def __enter__(self):
        self.raise_if_cancelled()
        self.store.lock.acquire()
        self.last_isolation_level = self.isolation_level
        self._snapshot = (deepcopy(self.store.rooms), deepcopy(self.store.bookings))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            return super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            self._snapshot = None
            self.store.lock.release()

    def commit(self):
        self.store.commits += 1
        self.store.published.extend(self._take_events())

    def rollback(self):
        self.store.rollbacks += 1
        self.store.rooms, self.store.bookings = self._snapshot
        self._events.clear()
