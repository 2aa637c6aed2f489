# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check and service info endpoints."""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from campus_events import __version__
from campus_events.api.dependencies import get_app_settings, get_database
from campus_events.core.config import Settings
from campus_events.infrastructure.database import Database

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    latency_ms: float | None = Field(None, description="Response latency in ms")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    database: ComponentHealth


class ServiceInfo(BaseModel):
    """Service description returned from the root path."""
    message: str
    version: str
    status: str
    endpoints: dict[str, list[str]]


@router.get("/", response_model=ServiceInfo)
async def service_info() -> ServiceInfo:
    """Describe the service and its endpoints."""
    return ServiceInfo(
        message="Campus Events API",
        version=__version__,
        status="running",
        endpoints={
            "core": [
                "POST /api/v1/colleges",
                "POST /api/v1/students",
                "POST /api/v1/events",
                "POST /api/v1/register",
                "POST /api/v1/attendance",
                "POST /api/v1/feedback",
            ],
            "reports": [
                "GET /api/v1/reports/event-popularity",
                "GET /api/v1/reports/attendance",
                "GET /api/v1/reports/student-participation",
                "GET /api/v1/reports/feedback",
                "GET /api/v1/reports/top-students",
            ],
            "utility": ["GET /health"],
        },
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """Check if the API and its database are healthy."""
    start = time.time()
    reachable = await database.check_connection()
    latency = (time.time() - start) * 1000

    if not reachable:
        logger.error("Database health check failed")

    return HealthResponse(
        status="ok" if reachable else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        database=ComponentHealth(
            status="healthy" if reachable else "unhealthy",
            latency_ms=round(latency, 2) if reachable else None,
        ),
    )
