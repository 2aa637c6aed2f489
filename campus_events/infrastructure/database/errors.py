# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Classification of storage integrity errors.

Services decide between "duplicate" and "missing referent" by inspecting
the driver error carried by an IntegrityError, never by re-querying.
PostgreSQL reports a SQLSTATE code; SQLite only reports a message.
"""

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

_UNIQUE_MARKERS = ("unique constraint", "duplicate key")
_FOREIGN_KEY_MARKERS = ("foreign key constraint",)


def _sqlstate(error: IntegrityError) -> str | None:
    """Extract the SQLSTATE code from a wrapped driver error, if any."""
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def _message(error: IntegrityError) -> str:
    return str(error.orig).lower()


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error is a uniqueness violation.

    Args:
        error: The IntegrityError raised by SQLAlchemy.

    Returns:
        True if a unique constraint rejected the write.
    """
    code = _sqlstate(error)
    if code is not None:
        return code == UNIQUE_VIOLATION
    message = _message(error)
    return any(marker in message for marker in _UNIQUE_MARKERS)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error is a foreign key violation.

    Args:
        error: The IntegrityError raised by SQLAlchemy.

    Returns:
        True if the write referenced a row that does not exist.
    """
    code = _sqlstate(error)
    if code is not None:
        return code == FOREIGN_KEY_VIOLATION
    message = _message(error)
    return any(marker in message for marker in _FOREIGN_KEY_MARKERS)
