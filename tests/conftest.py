# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (mocked sessions)
- Integration tests (temporary SQLite database)
"""

from collections.abc import Generator
from typing import Any

import pytest

from campus_events.core.config import clear_settings_cache


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Make every test read settings from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """Provide an aiosqlite URL for a throwaway database file."""
    return f"sqlite+aiosqlite:///{tmp_path / 'campus_events.db'}"


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (uses a temporary SQLite database)"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_event_data() -> dict[str, Any]:
    """Provide sample event data for testing."""
    return {
        "title": "Intro to Rust",
        "description": "Hands-on systems programming workshop",
        "event_type": "Workshop",
        "date": "2025-03-14",
        "start_time": "10:00:00",
        "end_time": "13:00:00",
        "venue": "Lab 2",
    }
