# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exam service.

Teachers may only schedule or edit exams for lessons they teach. Other
callers (administrators) are not restricted. Deletion is unrestricted
unless ``require_owner_on_delete`` is enabled.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.auth.session import SessionContext
from src.domains.errors import AuthorizationError, NotFoundError
from src.infrastructure.database.models.school import Exam, Lesson
from src.models.exam import ExamCreateRequest, ExamUpdateRequest

logger = logging.getLogger(__name__)


class ExamNotFoundError(NotFoundError):
    """Raised when exam is not found."""

    pass


class LessonNotOwnedError(AuthorizationError):
    """Raised when a teacher targets a lesson they do not teach."""

    pass


class ExamService:
    """Service for managing exams.

    Attributes:
        db: Async database session.
        session: Caller identity and role.
        require_owner_on_delete: Apply the lesson ownership check to deletes.
    """

    def __init__(
        self,
        db: AsyncSession,
        session: SessionContext,
        require_owner_on_delete: bool = False,
    ) -> None:
        self.db = db
        self.session = session
        self.require_owner_on_delete = require_owner_on_delete

    async def create_exam(self, request: ExamCreateRequest) -> Exam:
        """Schedule an exam.

        Raises:
            LessonNotOwnedError: If a teacher does not teach the lesson.
        """
        await self._check_lesson_access(request.lesson_id)

        exam = Exam(**request.model_dump())

        self.db.add(exam)
        await self.db.commit()
        await self.db.refresh(exam)

        logger.info("Created exam: %s (%s), lesson=%s", exam.title, exam.id, exam.lesson_id)

        return exam

    async def update_exam(self, request: ExamUpdateRequest) -> Exam:
        """Update an exam.

        The ownership check applies to the target lesson in the request.

        Raises:
            LessonNotOwnedError: If a teacher does not teach the lesson.
            ExamNotFoundError: If the exam does not exist.
        """
        await self._check_lesson_access(request.lesson_id)

        exam = await self.get_exam(request.id)
        for field, value in request.model_dump(exclude={"id"}).items():
            setattr(exam, field, value)

        await self.db.commit()
        await self.db.refresh(exam)

        logger.info("Updated exam: %s", request.id)

        return exam

    async def delete_exam(self, exam_id: int) -> None:
        """Delete an exam.

        Raises:
            ExamNotFoundError: If the exam does not exist.
            LessonNotOwnedError: If ownership is enforced on delete and the
                calling teacher does not teach the exam's lesson.
        """
        exam = await self.get_exam(exam_id)

        if self.require_owner_on_delete:
            await self._check_lesson_access(exam.lesson_id)

        await self.db.delete(exam)
        await self.db.commit()

        logger.info("Deleted exam: %s", exam_id)

    async def get_exam(self, exam_id: int) -> Exam:
        result = await self.db.execute(select(Exam).where(Exam.id == exam_id))
        exam = result.scalar_one_or_none()

        if not exam:
            raise ExamNotFoundError(f"Exam {exam_id} not found")

        return exam

    async def _check_lesson_access(self, lesson_id: int) -> None:
        if not self.session.is_teacher:
            return

        query = select(Lesson.id).where(
            Lesson.id == lesson_id,
            Lesson.teacher_id == self.session.user_id,
        )
        result = await self.db.execute(query)

        if result.scalar_one_or_none() is None:
            logger.warning(
                "Teacher %s denied access to lesson %s",
                self.session.user_id,
                lesson_id,
            )
            raise LessonNotOwnedError(f"Lesson {lesson_id} is not taught by the current teacher")
