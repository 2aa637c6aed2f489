# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Registration service."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from campus_events.domains.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    EventNotFoundError,
    StorageFailureError,
    StudentNotFoundError,
    ValidationError,
)
from campus_events.domains.registration import REGISTERED, RegistrationService
from campus_events.infrastructure.database import KeyedLockRegistry
from campus_events.utils.datetime import utc_now


class FakeDriverError(Exception):
    """Driver error carrying a SQLSTATE code like asyncpg does."""

    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def registration_service(mock_db):
    """Create registration service with mock database."""
    return RegistrationService(db=mock_db)


def create_event_result(event):
    """Create a mock result for the locked event lookup."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = event
    return result


def create_count_result(count: int):
    """Create a mock result for the registration count."""
    result = MagicMock()
    result.scalar_one.return_value = count
    return result


def make_event(max_capacity: int | None = 2):
    """Create a sample event model."""
    event = MagicMock()
    event.id = 7
    event.max_capacity = max_capacity
    event.has_capacity_limit = bool(max_capacity) and max_capacity > 0
    return event


def fill_registration(registration):
    """Simulate the store assigning id and timestamp on refresh."""
    registration.id = 1
    registration.created_at = utc_now()


class TestRegistrationValidation:
    """Tests for input validation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "student_id,event_id",
        [(None, 7), (1, None), ("1", 7), (1, True), (1.5, 7)],
    )
    async def test_rejects_malformed_ids(self, registration_service, mock_db, student_id, event_id):
        """Test malformed ids are rejected before any storage access."""
        with pytest.raises(ValidationError):
            await registration_service.register(student_id, event_id)

        mock_db.execute.assert_not_called()
        mock_db.add.assert_not_called()


class TestRegistrationRegister:
    """Tests for registering a student."""

    @pytest.mark.asyncio
    async def test_register_success(self, registration_service, mock_db):
        """Test successful registration below capacity."""
        mock_db.execute.side_effect = [
            create_event_result(make_event(max_capacity=2)),
            create_count_result(2),
        ]
        mock_db.refresh.side_effect = fill_registration

        result = await registration_service.register(1, 7)

        assert result.id == 1
        assert result.student_id == 1
        assert result.event_id == 7
        assert result.status == REGISTERED
        mock_db.add.assert_called_once()
        mock_db.commit.assert_called_once()
        mock_db.rollback.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_event_not_found(self, registration_service, mock_db):
        """Test registering for a missing event."""
        mock_db.execute.side_effect = [create_event_result(None)]

        with pytest.raises(EventNotFoundError):
            await registration_service.register(1, 999)

        mock_db.add.assert_not_called()
        mock_db.rollback.assert_called_once()

    @pytest.mark.asyncio
    async def test_register_event_full(self, registration_service, mock_db):
        """Test a registration overflowing the capacity is rolled back."""
        mock_db.execute.side_effect = [
            create_event_result(make_event(max_capacity=2)),
            create_count_result(3),
        ]

        with pytest.raises(CapacityExceededError):
            await registration_service.register(3, 7)

        mock_db.commit.assert_not_called()
        mock_db.rollback.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("capacity", [None, 0])
    async def test_register_unlimited_capacity(self, registration_service, mock_db, capacity):
        """Test events without a positive capacity never fill up."""
        mock_db.execute.side_effect = [
            create_event_result(make_event(max_capacity=capacity)),
        ]
        mock_db.refresh.side_effect = fill_registration

        result = await registration_service.register(1, 7)

        assert result.status == REGISTERED
        assert mock_db.execute.call_count == 1

    @pytest.mark.asyncio
    async def test_register_duplicate(self, registration_service, mock_db):
        """Test the unique constraint violation becomes a duplicate error."""
        mock_db.execute.side_effect = [
            create_event_result(make_event(max_capacity=5)),
            create_count_result(1),
        ]
        mock_db.flush.side_effect = IntegrityError(
            "INSERT INTO registrations",
            {},
            FakeDriverError("duplicate key value", sqlstate="23505"),
        )

        with pytest.raises(DuplicateRegistrationError):
            await registration_service.register(1, 7)

        mock_db.rollback.assert_called_once()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_duplicate_on_full_event(self, registration_service, mock_db):
        """Test an already registered student gets the duplicate error on a full event."""
        mock_db.execute.side_effect = [
            create_event_result(make_event(max_capacity=2)),
            create_count_result(3),
        ]
        mock_db.flush.side_effect = IntegrityError(
            "INSERT INTO registrations",
            {},
            FakeDriverError("duplicate key value", sqlstate="23505"),
        )

        with pytest.raises(DuplicateRegistrationError):
            await registration_service.register(1, 7)

        assert mock_db.execute.call_count == 1

    @pytest.mark.asyncio
    async def test_register_duplicate_sqlite_message(self, registration_service, mock_db):
        """Test SQLite's unique constraint message is recognised."""
        mock_db.execute.side_effect = [
            create_event_result(make_event(max_capacity=5)),
            create_count_result(1),
        ]
        mock_db.flush.side_effect = IntegrityError(
            "INSERT INTO registrations",
            {},
            Exception("UNIQUE constraint failed: registrations.student_id, registrations.event_id"),
        )

        with pytest.raises(DuplicateRegistrationError):
            await registration_service.register(1, 7)

    @pytest.mark.asyncio
    async def test_register_unknown_student(self, registration_service, mock_db):
        """Test a foreign key violation means the student does not exist."""
        mock_db.execute.side_effect = [
            create_event_result(make_event(max_capacity=5)),
            create_count_result(0),
        ]
        mock_db.flush.side_effect = IntegrityError(
            "INSERT INTO registrations",
            {},
            FakeDriverError("violates foreign key constraint", sqlstate="23503"),
        )

        with pytest.raises(StudentNotFoundError):
            await registration_service.register(404, 7)

        mock_db.rollback.assert_called_once()

    @pytest.mark.asyncio
    async def test_register_storage_failure(self, registration_service, mock_db):
        """Test other storage errors are reported generically."""
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))

        with pytest.raises(StorageFailureError) as exc_info:
            await registration_service.register(1, 7)

        assert "disk" not in str(exc_info.value)
        mock_db.rollback.assert_called_once()

    @pytest.mark.asyncio
    async def test_register_lock_timeout(self, mock_db):
        """Test a stuck critical section surfaces as a storage failure."""
        locks = KeyedLockRegistry(timeout=0.01)
        service = RegistrationService(db=mock_db, locks=locks)

        async with locks.hold(7):
            with pytest.raises(StorageFailureError):
                await service.register(1, 7)

        mock_db.execute.assert_not_called()


class TestRegistrationCount:
    """Tests for counting registrations."""

    @pytest.mark.asyncio
    async def test_count_registrations(self, registration_service, mock_db):
        """Test the count is read from the store."""
        mock_db.execute.return_value = create_count_result(4)

        assert await registration_service.count_registrations(7) == 4
