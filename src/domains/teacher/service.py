# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher service.

Teachers have an identity account (credentials) and a profile row keyed by
the account id. Both are written through AccountSync so that a failure in
either system leaves the other unchanged.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.accounts import AccountChanges, AccountSync, NewAccount
from src.domains.errors import MissingIdError, NotFoundError
from src.domains.subject.service import SubjectService
from src.infrastructure.database.models.school import Teacher
from src.models.teacher import TeacherCreateRequest, TeacherUpdateRequest

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
)


class TeacherNotFoundError(NotFoundError):
    """Raised when teacher is not found."""

    pass


class TeacherService:
    """Service for managing teachers.

    Attributes:
        db: Async database session.
        accounts: Identity account coordinator.
    """

    def __init__(self, db: AsyncSession, accounts: AccountSync) -> None:
        """Initialize teacher service.

        Args:
            db: Async database session.
            accounts: Coordinator for identity account writes.
        """
        self.db = db
        self.accounts = accounts
        self.subjects = SubjectService(db)

    async def create_teacher(self, request: TeacherCreateRequest) -> Teacher:
        """Create a teacher account and profile.

        Args:
            request: Teacher data, including the initial password.

        Returns:
            Created teacher; its id is the identity account id.

        Raises:
            SubjectNotFoundError: If any subject id is unknown.
            IdentityProviderError: If the account cannot be created.
        """
        subjects = await self.subjects.get_subjects(request.subjects)

        teacher = await self.accounts.create(
            NewAccount(
                username=request.username,
                password=request.password,
                first_name=request.name,
                last_name=request.surname,
            ),
            lambda user_id: Teacher(
                id=user_id,
                subjects=subjects,
                **request.model_dump(include=set(PROFILE_FIELDS)),
            ),
        )

        logger.info("Created teacher: %s (%s)", teacher.username, teacher.id)

        return teacher

    async def update_teacher(self, request: TeacherUpdateRequest) -> Teacher:
        """Update a teacher account and profile, replacing its subjects.

        Args:
            request: Teacher data. An empty password keeps the current one.

        Returns:
            Updated teacher.

        Raises:
            MissingIdError: If no id was supplied.
            TeacherNotFoundError: If teacher not found.
            IdentityProviderError: If the account update is rejected.
        """
        if not request.id:
            raise MissingIdError("Teacher")

        teacher = await self._get_by_id(request.id)
        subjects = await self.subjects.get_subjects(request.subjects)

        for field in PROFILE_FIELDS:
            setattr(teacher, field, getattr(request, field))
        teacher.subjects = subjects

        await self.accounts.update(
            teacher.id,
            AccountChanges(
                username=request.username,
                first_name=request.name,
                last_name=request.surname,
                password=request.password,
            ),
        )

        logger.info("Updated teacher: %s", teacher.id)

        return teacher

    async def delete_teacher(self, teacher_id: str) -> None:
        """Delete a teacher profile and account.

        Raises:
            TeacherNotFoundError: If teacher not found.
            IdentityProviderError: If the account deletion is rejected.
        """
        teacher = await self._get_by_id(teacher_id)

        await self.accounts.delete(teacher, teacher_id)

        logger.info("Deleted teacher: %s", teacher_id)

    async def _get_by_id(self, teacher_id: str) -> Teacher:
        query = (
            select(Teacher)
            .options(selectinload(Teacher.subjects))
            .where(Teacher.id == teacher_id)
        )
        result = await self.db.execute(query)
        teacher = result.scalar_one_or_none()

        if not teacher:
            raise TeacherNotFoundError(f"Teacher {teacher_id} not found")

        return teacher
