# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result service.

A result batch is inserted all-or-nothing: every referenced student and
subject is checked before any row is added, and the batch commits in a
single transaction.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.errors import InvalidPayloadError, NotFoundError
from src.domains.student.service import StudentNotFoundError
from src.domains.subject.service import SubjectService
from src.infrastructure.database.models.school import Result, Student
from src.models.result import ResultCreateRequest, ResultUpdateRequest

logger = logging.getLogger(__name__)


class EmptyResultBatchError(InvalidPayloadError):
    """Raised when a result batch has no entries."""

    def __init__(self) -> None:
        super().__init__("No data provided for insertion.")


class ResultNotFoundError(NotFoundError):
    """Raised when result is not found."""

    pass


class ResultService:
    """Service for recording and correcting exam results.

    Attributes:
        db: Async database session.
        subjects: Subject lookup used to validate subject references.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.subjects = SubjectService(db)

    async def create_results(self, request: ResultCreateRequest) -> list[Result]:
        """Insert a batch of results.

        Args:
            request: Batch of per-student, per-subject marks.

        Returns:
            The inserted results, in input order.

        Raises:
            EmptyResultBatchError: If the batch is empty.
            StudentNotFoundError: If any student id is unknown.
            SubjectNotFoundError: If any subject id is unknown.
        """
        if not request.entries:
            raise EmptyResultBatchError()

        await self._check_students(entry.student_id for entry in request.entries)
        await self.subjects.get_subjects(entry.subject_id for entry in request.entries)

        results = [Result(**entry.model_dump()) for entry in request.entries]

        try:
            self.db.add_all(results)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        for result in results:
            await self.db.refresh(result)

        logger.info("Inserted %d results", len(results))

        return results

    async def update_result(self, request: ResultUpdateRequest) -> Result:
        """Update a single result; the grade is kept when not supplied.

        Raises:
            ResultNotFoundError: If the result does not exist.
        """
        result = await self.get_result(request.id)

        result.student_id = request.student_id
        result.subject_id = request.subject_id
        result.marks = request.marks
        if request.grade is not None:
            result.grade = request.grade

        await self.db.commit()
        await self.db.refresh(result)

        logger.info("Updated result: %s", request.id)

        return result

    async def delete_result(self, result_id: str) -> None:
        """Delete a result.

        Raises:
            ResultNotFoundError: If the result does not exist.
        """
        result = await self.get_result(result_id)

        await self.db.delete(result)
        await self.db.commit()

        logger.info("Deleted result: %s", result_id)

    async def get_result(self, result_id: str) -> Result:
        query = select(Result).where(Result.id == result_id)
        row = (await self.db.execute(query)).scalar_one_or_none()

        if not row:
            raise ResultNotFoundError(f"Result {result_id} not found")

        return row

    async def _check_students(self, student_ids) -> None:
        ordered = list(dict.fromkeys(student_ids))

        result = await self.db.execute(select(Student.id).where(Student.id.in_(ordered)))
        found = set(result.scalars().all())

        for student_id in ordered:
            if student_id not in found:
                raise StudentNotFoundError(f"Student with ID '{student_id}' not found.")
