# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class request models."""

from typing import Any

from pydantic import Field, field_validator

from src.models.common import RequestModel, blank_to_none


class ClassCreateRequest(RequestModel):
    """Create a class."""

    name: str = Field(..., min_length=1, max_length=100, description="Class name")
    capacity: int = Field(..., ge=1, description="Maximum number of students")
    grade_id: int = Field(..., description="Grade ID")
    supervisor_id: str | None = Field(None, description="Supervising teacher ID")

    @field_validator("supervisor_id", mode="before")
    @classmethod
    def _supervisor_blank(cls, value: Any) -> Any:
        return blank_to_none(value)


class ClassUpdateRequest(ClassCreateRequest):
    """Update a class."""

    id: int = Field(..., description="Class ID")
