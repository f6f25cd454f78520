"""
Domain building blocks shared by rooms and bookings

- Entity: identity-based equality, used for Room
- ValueObject: frozen, compared field by field, used for TimeRange
- Aggregate: an entity that records domain events until the unit of work
  collects them, used for Booking
- DomainEvent: a committed fact, serialisable for the audit log
"""

from abc import ABC
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List
from uuid import UUID, uuid4


def _plain(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, ValueObject):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    return value


@dataclass(eq=False, kw_only=True)
class Entity(ABC):
    """
    Object with an identity

    Equal when the ids are equal, whatever the other attributes hold.
    Subclasses are declared with eq=False to keep this equality.
    """
    id: UUID = field(default_factory=uuid4)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable value without identity, equal when all fields are equal"""


@dataclass(eq=False, kw_only=True)
class Aggregate(Entity):
    """
    Consistency boundary that records what happened to it

    Events stay on the aggregate until the unit of work pulls them; they
    are published only if the surrounding transaction commits.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def clear_events(self):
        self._events.clear()

    def pull_events(self) -> List['DomainEvent']:
        """Return the recorded events and forget them"""
        events, self._events = self._events, []
        return events

    @property
    def events(self) -> List['DomainEvent']:
        return self._events.copy()


@dataclass(kw_only=True)
class DomainEvent:
    """
    Something that happened to an aggregate

    Subclasses add their payload as dataclass fields. ``to_dict`` flattens
    ids, datetimes, enums and value objects into JSON-friendly values.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: UUID | None = None

    def to_dict(self) -> dict:
        data = {'event_type': self.__class__.__name__}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data
