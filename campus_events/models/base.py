# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared base for response models read from ORM rows."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from campus_events.utils.datetime import ensure_utc


class RowResponse(BaseModel):
    """Response built from an ORM row; timestamps are normalised to UTC."""

    model_config = ConfigDict(from_attributes=True)

    @field_validator("*", mode="after")
    @classmethod
    def _timestamps_to_utc(cls, value: object) -> object:
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value
