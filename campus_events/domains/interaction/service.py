# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Interaction service for attendance and feedback.

Attendance and feedback are both keyed by (student_id, event_id). The
first submission inserts a row, every later one overwrites it in place:
the newest submission always wins. A resubmission is not an error.

No registration is required before attendance or feedback is recorded.
The student and the event must exist; the foreign keys enforce that.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.domains.exceptions import NotFoundError, StorageFailureError, ValidationError
from campus_events.infrastructure.database.errors import is_foreign_key_violation
from campus_events.infrastructure.database.models import Attendance, Base, Feedback
from campus_events.infrastructure.database.upsert import UpsertOutcome, UpsertResult, upsert_by_key
from campus_events.models.participation import AttendanceResponse, FeedbackResponse
from campus_events.utils.datetime import utc_now

logger = logging.getLogger(__name__)

PRESENT = "present"
ABSENT = "absent"
ATTENDANCE_STATUSES = (PRESENT, ABSENT)

MIN_RATING = 1
MAX_RATING = 5


def normalize_attendance_status(status: Any) -> str:
    """Map a submitted status to a stored one.

    Anything other than "present" or "absent" (including nothing) is
    recorded as present.
    """
    if status in ATTENDANCE_STATUSES:
        return status
    return PRESENT


def validate_rating(rating: Any) -> int:
    """Validate a feedback rating.

    Integral floats such as 4.0 are accepted; booleans, strings and
    fractional numbers are not.

    Args:
        rating: Submitted rating.

    Returns:
        The rating as an int.

    Raises:
        ValidationError: If the rating is missing, not a number or out of range.
    """
    if rating is None or isinstance(rating, bool):
        raise ValidationError("rating is required and must be a number")
    if isinstance(rating, float):
        if not rating.is_integer():
            raise ValidationError("rating must be a whole number")
        rating = int(rating)
    if not isinstance(rating, int):
        raise ValidationError("rating is required and must be a number")
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationError(f"rating must be {MIN_RATING}-{MAX_RATING}")
    return rating


def _require_ids(student_id: Any, event_id: Any) -> tuple[int, int]:
    for value in (student_id, event_id):
        if value is None or isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError("student_id and event_id are required integers")
    return student_id, event_id


class InteractionService:
    """Service for recording attendance and feedback.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize interaction service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def record_attendance(
        self,
        student_id: Any,
        event_id: Any,
        status: Any = None,
    ) -> tuple[AttendanceResponse, UpsertOutcome]:
        """Record or overwrite a student's attendance at an event.

        Args:
            student_id: Student identifier.
            event_id: Event identifier.
            status: "present" or "absent"; anything else means present.

        Returns:
            Tuple of (stored attendance row, whether it was inserted or updated).

        Raises:
            ValidationError: If an id is missing or malformed.
            NotFoundError: If the student or the event does not exist.
            StorageFailureError: On any other storage error.
        """
        student_id, event_id = _require_ids(student_id, event_id)
        status = normalize_attendance_status(status)

        result = await self._upsert(
            Attendance,
            key={"student_id": student_id, "event_id": event_id},
            values={"status": status, "marked_at": utc_now()},
        )

        logger.info(
            "Attendance %s: student=%s, event=%s, status=%s",
            result.outcome.value,
            student_id,
            event_id,
            status,
        )

        return AttendanceResponse.model_validate(result.row), result.outcome

    async def record_feedback(
        self,
        student_id: Any,
        event_id: Any,
        rating: Any,
        comment: str | None = None,
    ) -> tuple[FeedbackResponse, UpsertOutcome]:
        """Record or overwrite a student's feedback for an event.

        Args:
            student_id: Student identifier.
            event_id: Event identifier.
            rating: Integer rating from 1 to 5.
            comment: Optional free text, stored as given.

        Returns:
            Tuple of (stored feedback row, whether it was inserted or updated).

        Raises:
            ValidationError: If an id is missing or the rating is invalid.
            NotFoundError: If the student or the event does not exist.
            StorageFailureError: On any other storage error.
        """
        student_id, event_id = _require_ids(student_id, event_id)
        rating = validate_rating(rating)

        result = await self._upsert(
            Feedback,
            key={"student_id": student_id, "event_id": event_id},
            values={"rating": rating, "comment": comment, "submitted_at": utc_now()},
        )

        logger.info(
            "Feedback %s: student=%s, event=%s, rating=%s",
            result.outcome.value,
            student_id,
            event_id,
            rating,
        )

        return FeedbackResponse.model_validate(result.row), result.outcome

    async def _upsert(
        self,
        model: type[Base],
        key: dict[str, Any],
        values: dict[str, Any],
    ) -> UpsertResult:
        """Run an upsert as one transaction.

        Raises:
            NotFoundError: If a foreign key rejects the write.
            StorageFailureError: On any other storage error.
        """
        try:
            result = await upsert_by_key(self.db, model, key=key, values=values)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_foreign_key_violation(e):
                raise NotFoundError(
                    f"Student {key['student_id']} or event {key['event_id']} not found"
                ) from e
            logger.error("%s upsert failed: %s", model.__tablename__, e)
            raise StorageFailureError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("%s upsert failed: %s", model.__tablename__, e)
            raise StorageFailureError() from e

        return result
