# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class service for managing class/section operations.

This module provides the ClassService class for:
- Class CRUD operations
- Enrolment counts used by the student capacity check
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.errors import NotFoundError, PreconditionError
from src.infrastructure.database.models.school import Class, Student
from src.models.class_ import ClassCreateRequest, ClassUpdateRequest

logger = logging.getLogger(__name__)


class ClassNotFoundError(NotFoundError):
    """Raised when class is not found."""

    pass


class ClassFullError(PreconditionError):
    """Raised when a class has no free places left."""

    pass


class ClassService:
    """Service for managing classes.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize class service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def create_class(self, request: ClassCreateRequest) -> Class:
        """Create a new class.

        Args:
            request: Class creation data.

        Returns:
            Created class.
        """
        class_ = Class(**request.model_dump())

        self.db.add(class_)
        await self.db.commit()
        await self.db.refresh(class_)

        logger.info("Created class: %s (%s)", class_.name, class_.id)

        return class_

    async def update_class(self, request: ClassUpdateRequest) -> Class:
        """Update a class.

        Args:
            request: Update data, including the class id.

        Returns:
            Updated class.

        Raises:
            ClassNotFoundError: If class not found.
        """
        class_ = await self.get_class(request.id)

        for field, value in request.model_dump(exclude={"id"}).items():
            setattr(class_, field, value)

        await self.db.commit()
        await self.db.refresh(class_)

        logger.info("Updated class: %s", request.id)

        return class_

    async def delete_class(self, class_id: int) -> None:
        """Delete a class.

        Args:
            class_id: Class identifier.

        Raises:
            ClassNotFoundError: If class not found.
        """
        class_ = await self.get_class(class_id)

        await self.db.delete(class_)
        await self.db.commit()

        logger.info("Deleted class: %s", class_id)

    async def ensure_has_room(self, class_id: int) -> Class:
        """Check that a class can take one more student.

        Args:
            class_id: Class identifier.

        Returns:
            The class.

        Raises:
            ClassNotFoundError: If class not found.
            ClassFullError: If the class is at (or over) capacity.
        """
        class_ = await self.get_class(class_id)
        enrolled = await self.get_student_count(class_id)

        if enrolled >= class_.capacity:
            raise ClassFullError(
                f"Class '{class_.name}' is full ({enrolled}/{class_.capacity} students)"
            )

        return class_

    async def get_class(self, class_id: int) -> Class:
        """Get class by ID.

        Raises:
            ClassNotFoundError: If not found.
        """
        query = select(Class).where(Class.id == class_id)
        result = await self.db.execute(query)
        class_ = result.scalar_one_or_none()

        if not class_:
            raise ClassNotFoundError(f"Class {class_id} not found")

        return class_

    async def get_student_count(self, class_id: int) -> int:
        """Count students currently assigned to a class."""
        query = select(func.count()).select_from(Student).where(Student.class_id == class_id)
        result = await self.db.execute(query)
        return result.scalar() or 0
