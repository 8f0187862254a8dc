# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fields shared by teacher and student payloads.

Both carry an identity account (username/password) plus a personal
profile stored in the school database.
"""

from datetime import datetime
from typing import Any

from pydantic import EmailStr, Field, field_validator

from src.infrastructure.database.models.school import UserSex
from src.models.common import RequestModel, blank_to_none
from src.utils.datetime import coerce_datetime

MIN_PASSWORD_LENGTH = 8


class PersonRequest(RequestModel):
    """Account and profile fields of a teacher or student."""

    username: str = Field(..., min_length=3, max_length=20, description="Login name")
    name: str = Field(..., min_length=1, max_length=100, description="First name")
    surname: str = Field(..., min_length=1, max_length=100, description="Last name")
    email: EmailStr | None = Field(None, description="Email address")
    phone: str | None = Field(None, max_length=50, description="Phone number")
    address: str = Field(..., min_length=1, max_length=255, description="Postal address")
    img: str | None = Field(None, description="Avatar URL")
    blood_type: str = Field(..., min_length=1, max_length=8, description="Blood type")
    sex: UserSex = Field(..., description="MALE or FEMALE")
    birthday: datetime = Field(..., description="Date of birth")

    @field_validator("email", "phone", "img", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("sex", mode="before")
    @classmethod
    def _upper_sex(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("birthday", mode="before")
    @classmethod
    def _coerce_birthday(cls, value: Any) -> datetime:
        return coerce_datetime(value)


def check_new_password(value: str) -> str:
    """Validate a password for a new account."""
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    return value


def check_changed_password(value: str | None) -> str:
    """Validate an optional password change; empty means unchanged."""
    if not value:
        return ""
    return check_new_password(value)
