# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exam domain package."""

from src.domains.exam.service import ExamNotFoundError, ExamService, LessonNotOwnedError

__all__ = [
    "ExamService",
    "ExamNotFoundError",
    "LessonNotOwnedError",
]
