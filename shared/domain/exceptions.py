"""
Domain Errors

Every failure a use-case can report to its caller:
- ValidationError: malformed or out-of-range input, never retried
- NotFound: referenced room or booking does not exist
- Conflict: overlap, illegal state transition, duplicate room name
- ConcurrencyConflict: the store rejected a write because a concurrent
  transaction got there first; the caller may retry a few times
- OperationCancelled: the caller withdrew the request before the write
"""


class DomainError(Exception):
    """Base class for all errors raised by the booking core."""


class ValidationError(DomainError):
    """Input is malformed or out of range."""


class InvalidInterval(ValidationError):
    """A time range whose end is not strictly after its start."""


class NotFound(DomainError):
    """A referenced room or booking is absent."""


class Conflict(DomainError):
    """The request contradicts the current state of the schedule."""


class InvalidTransition(Conflict):
    """The booking status does not allow the requested operation."""


class ConcurrencyConflict(DomainError):
    """A concurrent writer won the race for the same rows."""


class OperationCancelled(DomainError):
    """The caller cancelled the operation before anything was written."""
