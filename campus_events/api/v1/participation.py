# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Participation API endpoints.

- POST /register - Register a student for an event
- POST /attendance - Mark attendance (201 on first mark, 200 on overwrite)
- POST /feedback - Submit feedback (201 on first submission, 200 on overwrite)

Domain errors are rendered by the application's ParticipationError
handler: 400 validation, 404 not found, 409 capacity/duplicate, 500
storage failure.
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from campus_events.api.dependencies import get_interaction_service, get_registration_service
from campus_events.domains.interaction import InteractionService
from campus_events.domains.registration import RegistrationService
from campus_events.infrastructure.database import UpsertOutcome
from campus_events.models.participation import (
    AttendanceRequest,
    AttendanceResponse,
    FeedbackRequest,
    FeedbackResponse,
    RegisterRequest,
    RegistrationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _status_for(outcome: UpsertOutcome) -> int:
    if outcome is UpsertOutcome.INSERTED:
        return status.HTTP_201_CREATED
    return status.HTTP_200_OK


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register for event",
)
async def register(
    data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResponse:
    """Register a student for an event."""
    return await service.register(data.student_id, data.event_id)


@router.post(
    "/attendance",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Mark attendance",
)
async def mark_attendance(
    data: AttendanceRequest,
    response: Response,
    service: InteractionService = Depends(get_interaction_service),
) -> AttendanceResponse:
    """Mark a student present or absent at an event."""
    attendance, outcome = await service.record_attendance(
        data.student_id, data.event_id, data.status
    )
    response.status_code = _status_for(outcome)
    return attendance


@router.post(
    "/feedback",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit feedback",
)
async def submit_feedback(
    data: FeedbackRequest,
    response: Response,
    service: InteractionService = Depends(get_interaction_service),
) -> FeedbackResponse:
    """Submit or replace a student's feedback for an event."""
    feedback, outcome = await service.record_feedback(
        data.student_id, data.event_id, data.rating, data.comment
    )
    response.status_code = _status_for(outcome)
    return feedback
