# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student service.

Creating a student enrols them in a class, which is only allowed while the
class has free places. The capacity check runs before any account or row
is written.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.accounts import AccountChanges, AccountSync, NewAccount
from src.domains.class_.service import ClassService
from src.domains.errors import MissingIdError, NotFoundError
from src.infrastructure.database.models.school import Student
from src.models.student import StudentCreateRequest, StudentUpdateRequest

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "username",
    "name",
    "surname",
    "email",
    "phone",
    "address",
    "img",
    "blood_type",
    "sex",
    "birthday",
    "grade_id",
    "class_id",
    "parent_id",
)


class StudentNotFoundError(NotFoundError):
    """Raised when student is not found."""

    pass


class StudentService:
    """Service for managing students.

    Attributes:
        db: Async database session.
        accounts: Identity account coordinator.
        classes: Class service used for the capacity check.
    """

    def __init__(self, db: AsyncSession, accounts: AccountSync) -> None:
        self.db = db
        self.accounts = accounts
        self.classes = ClassService(db)

    async def create_student(self, request: StudentCreateRequest) -> Student:
        """Create a student account and profile.

        Args:
            request: Student data, including class, grade and parent references.

        Returns:
            Created student; its id is the identity account id.

        Raises:
            ClassNotFoundError: If the class does not exist.
            ClassFullError: If the class is at capacity.
            IdentityProviderError: If the account cannot be created.
        """
        await self.classes.ensure_has_room(request.class_id)

        student = await self.accounts.create(
            NewAccount(
                username=request.username,
                password=request.password,
                first_name=request.name,
                last_name=request.surname,
            ),
            lambda user_id: Student(
                id=user_id,
                **request.model_dump(include=set(PROFILE_FIELDS)),
            ),
        )

        logger.info(
            "Created student: %s (%s), class=%s",
            student.username,
            student.id,
            request.class_id,
        )

        return student

    async def update_student(self, request: StudentUpdateRequest) -> Student:
        """Update a student account and profile.

        Raises:
            MissingIdError: If no id was supplied.
            StudentNotFoundError: If student not found.
            IdentityProviderError: If the account update is rejected.
        """
        if not request.id:
            raise MissingIdError("Student")

        student = await self.get_student(request.id)

        for field in PROFILE_FIELDS:
            setattr(student, field, getattr(request, field))

        await self.accounts.update(
            student.id,
            AccountChanges(
                username=request.username,
                first_name=request.name,
                last_name=request.surname,
                password=request.password,
            ),
        )

        logger.info("Updated student: %s", student.id)

        return student

    async def delete_student(self, student_id: str) -> None:
        """Delete a student profile and account.

        Raises:
            StudentNotFoundError: If student not found.
            IdentityProviderError: If the account deletion is rejected.
        """
        student = await self.get_student(student_id)

        await self.accounts.delete(student, student_id)

        logger.info("Deleted student: %s", student_id)

    async def get_student(self, student_id: str) -> Student:
        """Get student by ID.

        Raises:
            StudentNotFoundError: If not found.
        """
        result = await self.db.execute(select(Student).where(Student.id == student_id))
        student = result.scalar_one_or_none()

        if not student:
            raise StudentNotFoundError(f"Student with ID '{student_id}' not found.")

        return student
