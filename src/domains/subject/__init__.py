# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject domain package."""

from src.domains.subject.service import (
    SubjectNotFoundError,
    SubjectService,
    UnknownTeacherError,
)

__all__ = [
    "SubjectService",
    "SubjectNotFoundError",
    "UnknownTeacherError",
]
