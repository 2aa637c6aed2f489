# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for the relational store.

Example:
    from campus_events.infrastructure.database import Database

    database = Database.from_settings(settings)
    async with database.session() as session:
        result = await session.execute(select(Event))
"""

from campus_events.infrastructure.database.connection import (
    Database,
    DatabaseError,
    build_engine,
)
from campus_events.infrastructure.database.errors import (
    is_foreign_key_violation,
    is_unique_violation,
)
from campus_events.infrastructure.database.locks import KeyedLockRegistry, LockTimeoutError
from campus_events.infrastructure.database.upsert import (
    UnsupportedDialectError,
    UpsertOutcome,
    UpsertResult,
    upsert_by_key,
)

__all__ = [
    # Connection
    "Database",
    "DatabaseError",
    "build_engine",
    # Error inspection
    "is_unique_violation",
    "is_foreign_key_violation",
    # Locks
    "KeyedLockRegistry",
    "LockTimeoutError",
    # Upsert
    "UpsertOutcome",
    "UpsertResult",
    "UnsupportedDialectError",
    "upsert_by_key",
]
