# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Run the API server with uvicorn.

Usage:
    python -m campus_events
"""

import uvicorn

from campus_events.core.config import get_settings


def main() -> None:
    """Serve the application factory with the configured API settings."""
    settings = get_settings()
    uvicorn.run(
        "campus_events.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
