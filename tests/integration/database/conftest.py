# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for database integration tests.

Provides a Database handle on a throwaway SQLite file, sessions bound
to it and a small seeded catalog.
"""

from dataclasses import dataclass
from datetime import date, time
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.infrastructure.database import Database, KeyedLockRegistry, build_engine
from campus_events.infrastructure.database.models import College, Event, Student


@dataclass
class Catalog:
    """Ids of the seeded catalog rows."""

    college_id: int
    student_ids: list[int]
    event_ids: dict[str, int]


@pytest_asyncio.fixture(scope="function")
async def database(sqlite_url: str) -> AsyncGenerator[Database, None]:
    """Create a database handle with a fresh schema."""
    database = Database(build_engine(sqlite_url))
    await database.create_schema()

    yield database

    await database.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create async session for database tests."""
    async with database.sessionmaker() as session:
        yield session


@pytest.fixture
def locks() -> KeyedLockRegistry:
    """Registration lock registry shared by a test."""
    return KeyedLockRegistry(timeout=5.0)


@pytest_asyncio.fixture(scope="function")
async def catalog(database: Database) -> Catalog:
    """Seed one college, four students and a few events.

    Events:
        small: capacity 2
        open: no capacity limit
        talk: capacity 50, type Seminar
        quiet: capacity 10, never used by participation tests
    """
    async with database.sessionmaker() as session:
        college = College(name="North Campus", location="Pune", contact_email="admin@north.example.com")
        session.add(college)
        await session.flush()

        students = [
            Student(name=name, email=f"{name.lower()}@north.example.com", college_id=college.id)
            for name in ("Asha", "Bilal", "Chen", "Dana")
        ]
        session.add_all(students)

        def event(title: str, event_type: str, capacity: int | None, day: int) -> Event:
            return Event(
                title=title,
                event_type=event_type,
                date=date(2025, 3, day),
                start_time=time(10, 0),
                end_time=time(12, 0),
                venue="Main Hall",
                max_capacity=capacity,
                college_id=college.id,
            )

        events = {
            "small": event("Rust Workshop", "Workshop", 2, 10),
            "open": event("Open Hack Night", "Hackathon", None, 11),
            "talk": event("Cloud Talk", "Seminar", 50, 12),
            "quiet": event("Quiet Reading", "Seminar", 10, 13),
        }
        session.add_all(events.values())
        await session.commit()

        return Catalog(
            college_id=college.id,
            student_ids=[s.id for s in students],
            event_ids={key: e.id for key, e in events.items()},
        )
