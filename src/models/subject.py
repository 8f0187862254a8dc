# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject request models."""

from pydantic import Field

from src.models.common import RequestModel


class SubjectCreateRequest(RequestModel):
    """Create a subject and connect its teachers."""

    name: str = Field(..., min_length=1, max_length=255, description="Subject name")
    teachers: list[str] = Field(default_factory=list, description="Teacher ids")


class SubjectUpdateRequest(SubjectCreateRequest):
    """Rename a subject and replace its teacher set."""

    id: int = Field(..., description="Subject ID")
