# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher request models."""

from typing import Any

from pydantic import Field, field_validator

from src.models.common import blank_to_none
from src.models.profile import PersonRequest, check_changed_password, check_new_password


class TeacherCreateRequest(PersonRequest):
    """Create a teacher account and profile."""

    password: str = Field(..., description="Initial password")
    subjects: list[int] = Field(default_factory=list, description="Subject IDs taught")

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return check_new_password(value)


class TeacherUpdateRequest(PersonRequest):
    """Update a teacher account and profile.

    An empty password leaves the current one unchanged. The subject list
    replaces the teacher's subjects.
    """

    id: str | None = Field(None, description="Teacher ID (identity account ID)")
    password: str = Field("", description="New password, empty to keep")
    subjects: list[int] = Field(default_factory=list, description="Subject IDs taught")

    @field_validator("id", mode="before")
    @classmethod
    def _blank_id(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        return check_changed_password(value)
