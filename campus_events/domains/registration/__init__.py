# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration domain package.

This package provides the registration ledger:
- One registration per student and event
- Capacity ceiling per event
"""

from campus_events.domains.registration.service import REGISTERED, RegistrationService

__all__ = [
    "REGISTERED",
    "RegistrationService",
]
