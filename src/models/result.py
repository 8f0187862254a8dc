# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result request models.

Creation takes a batch of per-subject marks; updates touch one stored row.
The two shapes are deliberately separate types.
"""

from typing import Any

from pydantic import Field, model_validator

from src.models.common import RequestModel


class ResultEntry(RequestModel):
    """One mark for one student in one subject."""

    student_id: str = Field(..., min_length=1, description="Student ID")
    subject_id: int = Field(..., description="Subject ID")
    marks: int = Field(..., ge=0, description="Marks obtained")
    grade: str = Field(..., min_length=1, max_length=8, description="Letter grade")


class ResultCreateRequest(RequestModel):
    """Batch of results inserted all-or-nothing."""

    entries: list[ResultEntry] = Field(default_factory=list, description="Results to record")


class ResultUpdateRequest(RequestModel):
    """Update a single stored result.

    Also accepts the per-subject form shape
    ``{"id": ..., "studentId": ..., "subjects": [{"subjectId": 2, "marks": 80}]}``,
    in which case the first subject entry supplies ``subject_id``/``marks``
    (and ``grade`` when present).
    """

    id: str = Field(..., min_length=1, description="Result ID")
    student_id: str = Field(..., min_length=1, description="Student ID")
    subject_id: int = Field(..., description="Subject ID")
    marks: int = Field(..., ge=0, description="Marks obtained")
    grade: str | None = Field(None, max_length=8, description="Letter grade, unchanged when omitted")

    @model_validator(mode="before")
    @classmethod
    def _lift_first_subject(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "subjects" not in data:
            return data
        subjects = data.get("subjects") or []
        if not isinstance(subjects, list) or not subjects:
            raise ValueError("At least one subject entry is required")
        first = subjects[0]
        if not isinstance(first, dict):
            raise ValueError("Subject entries must be objects with subjectId and marks")
        lifted = {key: value for key, value in data.items() if key != "subjects"}
        for camel, snake in (("subjectId", "subject_id"), ("marks", "marks"), ("grade", "grade")):
            for key in (camel, snake):
                if key in first:
                    lifted[snake] = first[key]
        return lifted
