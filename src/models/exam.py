# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exam request models."""

from datetime import datetime
from typing import Self

from pydantic import Field, field_validator, model_validator

from src.models.common import RequestModel
from src.utils.datetime import coerce_datetime


class ExamCreateRequest(RequestModel):
    """Schedule an exam for a lesson."""

    title: str = Field(..., min_length=1, max_length=255, description="Exam title")
    start_time: datetime = Field(..., description="Exam start")
    end_time: datetime = Field(..., description="Exam end")
    lesson_id: int = Field(..., description="Lesson ID")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _coerce_times(cls, value: object) -> object:
        if isinstance(value, datetime) or value is None:
            return value
        return coerce_datetime(value)  # type: ignore[arg-type]

    @model_validator(mode="after")
    def _check_range(self) -> Self:
        if self.end_time <= self.start_time:
            raise ValueError("Exam end time must be after its start time")
        return self


class ExamUpdateRequest(ExamCreateRequest):
    """Reschedule or retitle an exam."""

    id: int = Field(..., description="Exam ID")
