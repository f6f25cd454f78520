"""Translate domain errors into HTTP problem responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import (
    ConcurrencyConflict,
    Conflict,
    DomainError,
    NotFound,
    OperationCancelled,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific classes first: InvalidInterval is a ValidationError,
# InvalidTransition is a Conflict
ERROR_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation error"),
    (NotFound, status.HTTP_404_NOT_FOUND, "Not found"),
    (ConcurrencyConflict, status.HTTP_409_CONFLICT, "Concurrent modification"),
    (Conflict, status.HTTP_409_CONFLICT, "Conflict"),
    (OperationCancelled, status.HTTP_503_SERVICE_UNAVAILABLE, "Operation cancelled"),
)


def _problem(status_code: int, title: str, detail: str) -> Response:
    return Response(
        {"title": title, "detail": detail, "status": status_code},
        status=status_code,
    )


def domain_exception_handler(exc, context):
    """
    DRF exception handler

    Domain errors become ``{"title", "detail", "status"}`` bodies; anything
    else falls through to the stock DRF handler (and to a 500 if DRF does
    not know it either).
    """
    if isinstance(exc, DomainError):
        for error_class, status_code, title in ERROR_STATUS:
            if isinstance(exc, error_class):
                view = context.get("view")
                logger.warning(
                    f"{title} in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
                )
                return _problem(status_code, title, str(exc))

    return exception_handler(exc, context)
