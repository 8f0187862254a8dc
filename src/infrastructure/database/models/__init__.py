# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the school database."""

from src.infrastructure.database.models.base import Base, TimestampMixin
from src.infrastructure.database.models.school import (
    Attendance,
    Class,
    Exam,
    Grade,
    Lesson,
    Parent,
    Result,
    Student,
    Subject,
    Teacher,
    UserSex,
    teacher_subjects,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "Attendance",
    "Class",
    "Exam",
    "Grade",
    "Lesson",
    "Parent",
    "Result",
    "Student",
    "Subject",
    "Teacher",
    "UserSex",
    "teacher_subjects",
]
