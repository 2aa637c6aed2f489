# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Catalog domain package.

This package manages the records the participation services read:
- Colleges
- Students (signup records)
- Events and their capacity
"""

from campus_events.domains.catalog.service import (
    DEFAULT_CREATED_BY,
    CatalogService,
    resolve_capacity,
)

__all__ = [
    "CatalogService",
    "DEFAULT_CREATED_BY",
    "resolve_capacity",
]
