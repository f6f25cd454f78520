"""
Unit of Work Pattern

Manages database transactions and ensures that domain events
are published only after successful transaction commit.

The check-and-write of every booking use-case runs inside one unit of
work, so an overlap check and the insert/update that follows it either
commit together or not at all.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from threading import Event
from typing import TYPE_CHECKING, List
import logging

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction

from shared.domain.base import DomainEvent
from shared.domain.exceptions import ConcurrencyConflict, OperationCancelled
from shared.infrastructure.db import is_write_conflict, set_transaction_isolation_level

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.bookings.domain.repositories import AbstractBookingRepository
    from apps.rooms.domain.repositories import AbstractRoomRepository

logger = logging.getLogger(__name__)


class IsolationLevel(str, Enum):
    READ_COMMITTED = 'READ COMMITTED'
    REPEATABLE_READ = 'REPEATABLE READ'
    SERIALIZABLE = 'SERIALIZABLE'


class AbstractUnitOfWork(ABC):
    """
    Abstract Unit of Work pattern

    Usage:
        with uow.begin(IsolationLevel.SERIALIZABLE, cancel_event) as uow:
            room = uow.rooms.get_by_id(room_id, lock=True)
            ...
            uow.raise_if_cancelled()
            uow.bookings.add(booking)
            uow.collect_events(booking)
            # Transaction commits here
        # Events are published after commit

    ``begin`` settings apply to the next ``with`` block only.
    """

    rooms: AbstractRoomRepository
    bookings: AbstractBookingRepository

    def __init__(self):
        self._events: List[DomainEvent] = []
        self.isolation_level: IsolationLevel | None = None
        self.cancel_event: Event | None = None

    def begin(
        self,
        isolation_level: IsolationLevel | None = None,
        cancel_event: Event | None = None,
    ) -> AbstractUnitOfWork:
        """Configure the next transaction"""
        self.isolation_level = isolation_level
        self.cancel_event = cancel_event
        return self

    def __enter__(self):
        self.raise_if_cancelled()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._reset()

    def raise_if_cancelled(self):
        """Abort before anything is written if the caller gave up"""
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise OperationCancelled("Operation was cancelled by the caller.")

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    def collect_events(self, aggregate):
        """Move the events recorded on ``aggregate`` into this unit of work"""
        new_events = aggregate.pull_events()
        if new_events:
            self._events.extend(new_events)
            logger.debug(
                f"Collected {len(new_events)} events from "
                f"{aggregate.__class__.__name__} (ID: {aggregate.id})"
            )

    def _take_events(self) -> List[DomainEvent]:
        events = self._events.copy()
        self._events.clear()
        return events

    def _reset(self):
        self.isolation_level = None
        self.cancel_event = None


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Opens ``transaction.atomic()``, applies the requested isolation level
    when this is the outermost transaction and translates write conflicts
    reported by the store (unique/exclusion violations, serialization
    failures) into ConcurrencyConflict.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        super().__init__()
        from apps.bookings.repositories import DjangoBookingRepository
        from apps.rooms.repositories import DjangoRoomRepository

        self.using = using
        self.rooms = DjangoRoomRepository(using)
        self.bookings = DjangoBookingRepository(using)
        self._transaction = None

    def __enter__(self):
        """Start database transaction"""
        self.raise_if_cancelled()

        outermost = not transaction.get_connection(self.using).in_atomic_block
        self._transaction = transaction.atomic(using=self.using)
        try:
            self._transaction.__enter__()
        except DatabaseError as exc:
            # In IMMEDIATE mode SQLite reports lock contention at BEGIN
            self._transaction = None
            self._reset()
            if is_write_conflict(exc):
                raise ConcurrencyConflict("Another transaction holds the write lock.") from exc
            raise
        if outermost and self.isolation_level:
            try:
                set_transaction_isolation_level(self.isolation_level.value, using=self.using)
            except BaseException as exc:
                self._transaction.__exit__(type(exc), exc, exc.__traceback__)
                self._transaction = None
                raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        atomic, self._transaction = self._transaction, None
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
            # The actual COMMIT/ROLLBACK happens here
            atomic.__exit__(exc_type, exc_val, exc_tb)
        except DatabaseError as exc:
            if is_write_conflict(exc):
                raise ConcurrencyConflict("Concurrent update detected, transaction rolled back.") from exc
            raise
        finally:
            self._reset()

        if exc_type is not None and is_write_conflict(exc_val):
            raise ConcurrencyConflict("Concurrent update detected, transaction rolled back.") from exc_val
        return False

    def commit(self):
        """
        Schedule event publishing after commit

        Events are published using Django's transaction.on_commit()
        to ensure they're only sent after database commit succeeds.
        """
        events = self._take_events()
        logger.debug(f"Committing transaction with {len(events)} events")

        if events:
            transaction.on_commit(lambda: self._publish_events(events), using=self.using)

    def rollback(self):
        """Rollback changes and discard events"""
        logger.warning(f"Rolling back transaction, discarding {len(self._events)} events")
        self._events.clear()

    def _publish_events(self, events: List[DomainEvent]):
        """
        Publish collected events to message bus

        Called after successful transaction commit.
        """
        from shared.application.message_bus import message_bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        message_bus.publish_events(events)
