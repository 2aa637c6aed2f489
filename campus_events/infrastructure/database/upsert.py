# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Insert-or-update keyed by a composite natural key.

upsert_by_key writes a row identified by its natural key (for example
student_id + event_id) and reports whether the write inserted a new row
or overwrote an existing one. The newest write always wins.

The write is one INSERT .. ON CONFLICT DO UPDATE statement on both
PostgreSQL and SQLite. The target table carries a revision column that
the insert sets to 1 and the conflict branch increments; the statement
returns it, so the outcome comes from the write itself. Two concurrent
first submissions for the same key serialize on the unique index and
resolve into exactly one insert and one update.

Example:
    result = await upsert_by_key(
        session,
        Attendance,
        key={"student_id": 1, "event_id": 7},
        values={"status": "absent", "marked_at": utc_now()},
    )
    if result.outcome is UpsertOutcome.UPDATED:
        ...
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.infrastructure.database.models import Base

ModelT = TypeVar("ModelT", bound=Base)

REVISION_COLUMN = "revision"
FIRST_REVISION = 1


class UpsertOutcome(str, Enum):
    """What an upsert did to the store."""

    INSERTED = "inserted"
    UPDATED = "updated"


@dataclass(frozen=True)
class UpsertResult(Generic[ModelT]):
    """Tagged result of an upsert.

    Attributes:
        outcome: Whether the row was inserted or updated.
        row: The row as read back after the write.
    """

    outcome: UpsertOutcome
    row: ModelT

    @property
    def inserted(self) -> bool:
        """Whether the write created the row."""
        return self.outcome is UpsertOutcome.INSERTED


class UnsupportedDialectError(Exception):
    """Raised when the store dialect has no upsert implementation."""

    pass


# Both dialects share the ON CONFLICT syntax, only the construct differs.
_INSERT_CONSTRUCTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _key_clause(model: type[Base], key: dict[str, Any]):
    table = model.__table__
    return and_(*(table.c[name] == value for name, value in key.items()))


async def upsert_by_key(
    session: AsyncSession,
    model: type[ModelT],
    key: dict[str, Any],
    values: dict[str, Any],
) -> UpsertResult[ModelT]:
    """Insert a row or overwrite the one sharing its natural key.

    The caller owns the transaction: nothing is committed here.

    Args:
        session: Active async session.
        model: ORM model whose table has a unique constraint on key's
            columns and an integer revision column.
        key: Natural key column values.
        values: Non-key column values to write.

    Returns:
        UpsertResult with the outcome and the row read back from the store.

    Raises:
        UnsupportedDialectError: If the dialect has no implementation.
        sqlalchemy.exc.IntegrityError: If another constraint (e.g. a foreign
            key) rejects the write.
    """
    dialect = session.get_bind().dialect.name
    insert = _INSERT_CONSTRUCTS.get(dialect)
    if insert is None:
        raise UnsupportedDialectError(f"No upsert implementation for dialect {dialect!r}")

    table = model.__table__
    revision = table.c[REVISION_COLUMN]

    stmt = insert(table).values(**key, **values, **{REVISION_COLUMN: FIRST_REVISION})
    stmt = stmt.on_conflict_do_update(
        index_elements=list(key),
        set_={**values, REVISION_COLUMN: revision + 1},
    ).returning(revision)

    written = await session.execute(stmt)
    if written.scalar_one() == FIRST_REVISION:
        outcome = UpsertOutcome.INSERTED
    else:
        outcome = UpsertOutcome.UPDATED

    result = await session.execute(
        select(model)
        .where(_key_clause(model, key))
        .execution_options(populate_existing=True)
    )
    return UpsertResult(outcome=outcome, row=result.scalar_one())
