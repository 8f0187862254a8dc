# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and result models for the mutation handlers."""

from src.models.attendance import AttendanceCreateRequest, AttendanceUpdateRequest
from src.models.class_ import ClassCreateRequest, ClassUpdateRequest
from src.models.common import (
    ErrorKind,
    MutationFailure,
    MutationResult,
    MutationSuccess,
    RequestModel,
)
from src.models.exam import ExamCreateRequest, ExamUpdateRequest
from src.models.parent import ParentCreateRequest, ParentUpdateRequest
from src.models.result import ResultCreateRequest, ResultEntry, ResultUpdateRequest
from src.models.student import StudentCreateRequest, StudentUpdateRequest
from src.models.subject import SubjectCreateRequest, SubjectUpdateRequest
from src.models.teacher import TeacherCreateRequest, TeacherUpdateRequest

__all__ = [
    # Results
    "ErrorKind",
    "MutationFailure",
    "MutationResult",
    "MutationSuccess",
    "RequestModel",
    # Requests
    "AttendanceCreateRequest",
    "AttendanceUpdateRequest",
    "ClassCreateRequest",
    "ClassUpdateRequest",
    "ExamCreateRequest",
    "ExamUpdateRequest",
    "ParentCreateRequest",
    "ParentUpdateRequest",
    "ResultCreateRequest",
    "ResultEntry",
    "ResultUpdateRequest",
    "StudentCreateRequest",
    "StudentUpdateRequest",
    "SubjectCreateRequest",
    "SubjectUpdateRequest",
    "TeacherCreateRequest",
    "TeacherUpdateRequest",
]
