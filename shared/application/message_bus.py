"""
Message Bus

Dispatches room and booking commands and queries to exactly one handler
and fans committed domain events out to any number of subscribers.

Handlers that lose a write race raise ConcurrencyConflict. The bus runs
them again, each time in a new transaction, up to ``max_retries`` times
and then reports a Conflict to the caller.
"""

from collections import defaultdict
from threading import Event
from typing import Any, Callable, DefaultDict, Dict, List, Type
import logging

from shared.domain.base import DomainEvent
from shared.domain.exceptions import ConcurrencyConflict, Conflict

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3


def _name(handler) -> str:
    return getattr(handler, "__name__", handler.__class__.__name__)


class MessageBus:
    """
    Routes messages to handlers

    A command or query type has a single handler, called as
    ``handler(message, cancel_event=...)``. An event type may have many
    subscribers, each called with the event.
    """

    def __init__(self, max_retries: int = DEFAULT_MAX_RETRIES):
        self.max_retries = max_retries
        self._subscribers: DefaultDict[Type[DomainEvent], List[Callable]] = defaultdict(list)
        self._handlers: Dict[Type, Callable] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: Callable[[DomainEvent], None]):
        self._subscribers[event_type].append(handler)
        logger.debug(f"{_name(handler)} subscribed to {event_type.__name__}")

    def register_command_handler(self, command_type: Type, handler: Callable[..., Any]):
        """Bind ``command_type`` to its handler; a second binding is an error"""
        if command_type in self._handlers:
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._handlers[command_type] = handler
        logger.debug(f"{command_type.__name__} bound to {_name(handler)}")

    def handle_command(self, command: Any, cancel_event: Event | None = None) -> Any:
        """
        Run the handler of ``command`` and return its result

        ValueError if nothing handles this type. Domain errors propagate
        unchanged except ConcurrencyConflict, which is retried and finally
        raised as Conflict chained from the last attempt.
        """
        name = type(command).__name__
        try:
            handler = self._handlers[type(command)]
        except KeyError:
            raise ValueError(f"No handler for {name}") from None

        logger.info(f"Handling {name}")
        attempts = self.max_retries + 1
        attempt = 1
        while True:
            try:
                return handler(command, cancel_event=cancel_event)
            except ConcurrencyConflict as e:
                if attempt >= attempts:
                    logger.error(f"{name} lost {attempts} write races in a row: {e}")
                    raise Conflict("The room was modified concurrently, please try again.") from e
                logger.warning(f"{name} lost a write race (attempt {attempt}/{attempts}), retrying")
                attempt += 1
            except Exception as e:
                logger.info(f"{name} failed: {e.__class__.__name__}: {e}")
                raise

    def publish_events(self, events: List[DomainEvent]):
        """
        Deliver committed events to their subscribers

        The change behind an event is already committed, so a failing
        subscriber is logged and the remaining ones still run.
        """
        for event in events:
            subscribers = self._subscribers.get(type(event), [])
            if not subscribers:
                logger.debug(f"Nobody listens to {type(event).__name__}")
                continue

            logger.info(f"Publishing {type(event).__name__} {event.event_id}")
            for subscriber in subscribers:
                try:
                    subscriber(event)
                except Exception:
                    logger.exception(
                        f"{_name(subscriber)} failed on {type(event).__name__} {event.event_id}"
                    )


def bind_handler(handler_class: Type, uow_factory: Callable[[], Any], **kwargs) -> Callable[..., Any]:
    """
    Adapt a handler class to the bus

    Every call gets its own handler and unit of work, so concurrent
    requests never share transaction state.
    """
    def handle(command, cancel_event: Event | None = None):
        return handler_class(uow_factory(), **kwargs).handle(command, cancel_event=cancel_event)

    handle.__name__ = handler_class.__name__
    return handle


message_bus = MessageBus()
