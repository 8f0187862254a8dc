# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance request models."""

from datetime import datetime
from typing import Self

from pydantic import Field, field_validator, model_validator

from src.models.common import RequestModel
from src.utils.datetime import coerce_datetime


class AttendanceCreateRequest(RequestModel):
    """Record a day's attendance for a class.

    ``date`` accepts ISO strings, dates, datetimes and millisecond
    timestamps; it is stored as a UTC datetime.
    """

    class_name: str = Field(..., min_length=1, max_length=100, description="Class name")
    date: datetime = Field(..., description="Attendance date")
    day: str = Field(..., min_length=1, max_length=16, description="Weekday label")
    present: int = Field(..., ge=0, description="Students present")
    total: int = Field(..., ge=0, description="Students on the roll")

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> datetime:
        return coerce_datetime(value)  # type: ignore[arg-type]

    @model_validator(mode="after")
    def _check_counts(self) -> Self:
        if self.present > self.total:
            raise ValueError("Present count cannot exceed total")
        return self


class AttendanceUpdateRequest(AttendanceCreateRequest):
    """Correct an attendance record."""

    id: int = Field(..., description="Attendance ID")
