# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    catalog: Colleges, students and events.
    participation: Registration, attendance and feedback.
    reports: Participation analytics.
"""

from fastapi import APIRouter

from campus_events.api.v1 import catalog, participation, reports

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(catalog.router, tags=["Catalog"])
router.include_router(participation.router, tags=["Participation"])
router.include_router(reports.router, prefix="/reports", tags=["Reports"])

__all__ = ["router"]
