"""Database helpers shared by the Django repositories and unit of work."""

from __future__ import annotations

import logging

from django.db import DatabaseError, IntegrityError, OperationalError, connections, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

logger = logging.getLogger(__name__)

# SQLSTATE codes PostgreSQL uses when a concurrent transaction wins:
# serialization_failure, deadlock_detected, unique_violation, exclusion_violation
WRITE_CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "23505", "23P01"})

# SQLite result codes: SQLITE_BUSY, SQLITE_LOCKED (primary code in the low byte)
SQLITE_BUSY_CODES = frozenset({5, 6})
# SQLITE_CONSTRAINT_PRIMARYKEY, SQLITE_CONSTRAINT_UNIQUE
SQLITE_UNIQUE_CODES = frozenset({1555, 2067})

ISOLATION_LEVELS = frozenset({
    "READ COMMITTED",
    "REPEATABLE READ",
    "SERIALIZABLE",
})


def lock_queryset_if_possible(queryset, using: str | None = None):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection(using).in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def set_transaction_isolation_level(level: str | None, using: str = "default") -> bool:
    """
    Set the isolation level of the transaction that was just opened

    Must run before any other statement of the transaction. Only
    PostgreSQL honours per-transaction levels; elsewhere this is a no-op.
    Returns True if the level was applied.
    """
    if not level:
        return False
    if level not in ISOLATION_LEVELS:
        raise ValueError(f"Unsupported isolation level: {level}")

    connection = connections[using]
    if connection.vendor != "postgresql":
        return False

    with connection.cursor() as cursor:
        cursor.execute(f"SET TRANSACTION ISOLATION LEVEL {level}")
    logger.debug(f"Transaction isolation level set to {level}")
    return True


def _sqlstate(exc: BaseException) -> str | None:
    cause = exc.__cause__
    if cause is None:
        return None
    # psycopg 3 exposes ``sqlstate``, psycopg2 exposes ``pgcode``
    return getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)


def _sqlite_code(exc: BaseException) -> int | None:
    return getattr(exc.__cause__, "sqlite_errorcode", None)


def _sqlite_locked(exc: OperationalError) -> bool:
    code = _sqlite_code(exc)
    if code is not None:
        return (code & 0xFF) in SQLITE_BUSY_CODES
    # "database is locked", "database table is locked: <table>", ...
    message = str(exc).lower()
    return message.startswith("database") and "is locked" in message


def _unique_violation(exc: IntegrityError) -> bool:
    code = _sqlite_code(exc)
    if code is not None:
        return code in SQLITE_UNIQUE_CODES
    sqlstate = _sqlstate(exc)
    if sqlstate is not None:
        return sqlstate in WRITE_CONFLICT_SQLSTATES
    return "unique constraint" in str(exc).lower()


def is_write_conflict(exc: BaseException | None) -> bool:
    """
    True if the store rejected a write because of a concurrent writer

    Unique and exclusion violations, serialization failures, deadlocks and
    SQLite lock contention qualify. Check and foreign key violations do
    not: running the same write again cannot make them pass.
    """
    if exc is None or not isinstance(exc, DatabaseError):
        return False
    if isinstance(exc, IntegrityError):
        return _unique_violation(exc)
    if isinstance(exc, OperationalError) and _sqlite_locked(exc):
        return True
    return _sqlstate(exc) in WRITE_CONFLICT_SQLSTATES
