# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions shared by the participation services.

Every failure is request-scoped: the service rolls its session back
before raising, so no error leaves partial state behind.
"""


class ParticipationError(Exception):
    """Base exception for participation service errors."""

    pass


class ValidationError(ParticipationError):
    """Raised when a required field is missing or malformed.

    Always raised before any storage access.
    """

    pass


class NotFoundError(ParticipationError):
    """Raised when a referenced record does not exist."""

    pass


class CollegeNotFoundError(NotFoundError):
    """Raised when college is not found."""

    pass


class StudentNotFoundError(NotFoundError):
    """Raised when student is not found."""

    pass


class EventNotFoundError(NotFoundError):
    """Raised when event is not found."""

    pass


class CapacityExceededError(ParticipationError):
    """Raised when an event already holds as many registrations as it allows."""

    pass


class DuplicateRegistrationError(ParticipationError):
    """Raised when the student is already registered for the event."""

    pass


class EmailAlreadyRegisteredError(ParticipationError):
    """Raised when a signup uses an email that is already taken."""

    pass


class StorageFailureError(ParticipationError):
    """Raised for any other storage error.

    The message never carries storage internals; the original error is
    chained for logging.
    """

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(message)
