# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from campus_events.utils.datetime import ensure_utc, utc_now
from campus_events.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    "ensure_utc",
    "utc_now",
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
]
