# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subject service.

Subjects are linked to the teachers who teach them. Creating a subject
connects the given teachers; updating replaces the whole teacher set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.errors import NotFoundError
from src.infrastructure.database.models.school import Subject, Teacher
from src.models.subject import SubjectCreateRequest, SubjectUpdateRequest

logger = logging.getLogger(__name__)


class SubjectNotFoundError(NotFoundError):
    """Raised when one or more subjects are not found."""

    pass


class UnknownTeacherError(NotFoundError):
    """Raised when a referenced teacher does not exist."""

    pass


class SubjectService:
    """Service for managing subjects.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_subject(self, request: SubjectCreateRequest) -> Subject:
        """Create a subject taught by the given teachers.

        Raises:
            UnknownTeacherError: If any teacher id is unknown.
        """
        teachers = await self._get_teachers(request.teachers)
        subject = Subject(name=request.name, teachers=teachers)

        self.db.add(subject)
        await self.db.commit()
        await self.db.refresh(subject)

        logger.info("Created subject: %s (%s), teachers=%d", subject.name, subject.id, len(teachers))

        return subject

    async def update_subject(self, request: SubjectUpdateRequest) -> Subject:
        """Rename a subject and replace its teacher set.

        Raises:
            SubjectNotFoundError: If the subject does not exist.
            UnknownTeacherError: If any teacher id is unknown.
        """
        subject = await self._get_by_id(request.id)
        teachers = await self._get_teachers(request.teachers)

        subject.name = request.name
        subject.teachers = teachers

        await self.db.commit()

        logger.info("Updated subject: %s, teachers=%d", request.id, len(teachers))

        return subject

    async def delete_subject(self, subject_id: int) -> None:
        """Delete a subject.

        Rows that still reference the subject (lessons, results) make the
        commit fail with an integrity error.

        Raises:
            SubjectNotFoundError: If the subject does not exist.
        """
        subject = await self._get_by_id(subject_id)

        await self.db.delete(subject)
        await self.db.commit()

        logger.info("Deleted subject: %s", subject_id)

    async def get_subjects(self, subject_ids: Iterable[int]) -> list[Subject]:
        """Load subjects by id, requiring every id to exist.

        Args:
            subject_ids: Subject identifiers; duplicates are ignored.

        Returns:
            The matching subjects.

        Raises:
            SubjectNotFoundError: If any id has no matching subject.
        """
        wanted = set(subject_ids)
        if not wanted:
            return []

        result = await self.db.execute(select(Subject).where(Subject.id.in_(wanted)))
        subjects = list(result.scalars().all())

        if len(subjects) != len(wanted):
            missing = wanted - {subject.id for subject in subjects}
            logger.debug("Unknown subject ids: %s", sorted(missing))
            raise SubjectNotFoundError("One or more subject IDs are invalid.")

        return subjects

    async def _get_by_id(self, subject_id: int) -> Subject:
        query = (
            select(Subject)
            .options(selectinload(Subject.teachers))
            .where(Subject.id == subject_id)
        )
        result = await self.db.execute(query)
        subject = result.scalar_one_or_none()

        if not subject:
            raise SubjectNotFoundError(f"Subject {subject_id} not found")

        return subject

    async def _get_teachers(self, teacher_ids: list[str]) -> list[Teacher]:
        wanted = set(teacher_ids)
        if not wanted:
            return []

        result = await self.db.execute(select(Teacher).where(Teacher.id.in_(wanted)))
        teachers = list(result.scalars().all())

        if len(teachers) != len(wanted):
            missing = wanted - {teacher.id for teacher in teachers}
            raise UnknownTeacherError(f"Teachers not found: {', '.join(sorted(missing))}")

        return teachers
