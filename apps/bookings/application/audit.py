"""Audit trail for committed booking changes."""

import structlog

from shared.domain.base import DomainEvent

logger = structlog.get_logger(__name__)


def log_booking_event(event: DomainEvent):
    """Write one structured line per committed booking event"""
    logger.info("booking.event", **event.to_dict())
