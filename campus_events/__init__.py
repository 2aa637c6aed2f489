"""Campus Events Backend.

Participation tracking for campus events: registration against capacity
limits, attendance, feedback and the reports derived from them.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
