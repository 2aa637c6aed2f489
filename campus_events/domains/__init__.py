# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services for campus event participation.

- catalog: colleges, students and events
- registration: registration ledger with capacity and uniqueness guards
- interaction: attendance and feedback upserts
- analytics: read-only participation reports
"""
