# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent request models.

Parent profile fields are optional and stored as empty strings when absent.
"""

from typing import Any

from pydantic import Field, field_validator

from src.models.common import RequestModel, blank_to_none
from src.models.profile import check_changed_password, check_new_password


class ParentFields(RequestModel):
    """Profile fields of a parent."""

    username: str = Field(..., min_length=3, max_length=20, description="Login name")
    name: str = Field("", max_length=100, description="First name")
    surname: str = Field("", max_length=100, description="Last name")
    email: str = Field("", max_length=255, description="Email address")
    phone: str = Field("", max_length=50, description="Phone number")
    address: str = Field("", max_length=255, description="Postal address")

    @field_validator("name", "surname", "email", "phone", "address", mode="before")
    @classmethod
    def _default_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ParentCreateRequest(ParentFields):
    """Create a parent account and profile."""

    password: str = Field(..., description="Initial password")

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return check_new_password(value)


class ParentUpdateRequest(ParentFields):
    """Update a parent account and profile."""

    id: str | None = Field(None, description="Parent ID (identity account ID)")
    password: str = Field("", description="New password, empty to keep")

    @field_validator("id", mode="before")
    @classmethod
    def _blank_id(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any) -> str:
        return check_changed_password(value)
