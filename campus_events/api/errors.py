# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Translation of domain exceptions into HTTP responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from campus_events.domains.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    EmailAlreadyRegisteredError,
    NotFoundError,
    ParticipationError,
    StorageFailureError,
    ValidationError,
)
from campus_events.utils.logging import get_logger

logger = get_logger(__name__)

_STATUS_CODES: list[tuple[type[ParticipationError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (CapacityExceededError, status.HTTP_409_CONFLICT),
    (DuplicateRegistrationError, status.HTTP_409_CONFLICT),
    (EmailAlreadyRegisteredError, status.HTTP_409_CONFLICT),
]

_ERROR_CODES: dict[type[ParticipationError], str] = {
    ValidationError: "validation_error",
    NotFoundError: "not_found",
    CapacityExceededError: "capacity_exceeded",
    DuplicateRegistrationError: "duplicate_registration",
    EmailAlreadyRegisteredError: "email_already_registered",
}


def status_code_for(error: ParticipationError) -> int:
    """Get the HTTP status code for a domain error."""
    for error_type, code in _STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_code_for(error: ParticipationError) -> str:
    for error_type, code in _ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return "storage_failure"


async def participation_error_handler(request: Request, exc: ParticipationError) -> JSONResponse:
    """Render a ParticipationError as a JSON error body.

    Storage failures get a generic message so no storage detail leaks.
    """
    code = status_code_for(exc)

    if isinstance(exc, StorageFailureError) or code >= 500:
        logger.error(
            "Request failed",
            method=request.method,
            path=request.url.path,
            error=repr(exc.__cause__ or exc),
        )
        message = "Internal storage error"
    else:
        message = str(exc)

    return JSONResponse(
        status_code=code,
        content={"error": message, "code": _error_code_for(exc)},
    )
