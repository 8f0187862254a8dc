# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student request models."""

from typing import Any

from pydantic import Field, field_validator

from src.models.common import blank_to_none
from src.models.profile import PersonRequest, check_changed_password, check_new_password


class StudentCreateRequest(PersonRequest):
    """Create a student account and enrol the student in a class."""

    password: str = Field(..., description="Initial password")
    grade_id: int = Field(..., description="Grade ID")
    class_id: int = Field(..., description="Class ID")
    parent_id: str = Field(..., min_length=1, description="Parent ID")

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return check_new_password(value)


class StudentUpdateRequest(PersonRequest):
    """Update a student account and profile."""

    id: str | None = Field(None, description="Student ID (identity account ID)")
    password: str = Field("", description="New password, empty to keep")
    grade_id: int = Field(..., description="Grade ID")
    class_id: int = Field(..., description="Class ID")
    parent_id: str = Field(..., min_length=1, description="Parent ID")

    @field_validator("id", mode="before")
    @classmethod
    def _blank_id(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        return check_changed_password(value)
