# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Attendance service for daily per-class attendance records."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.errors import NotFoundError
from src.infrastructure.database.models.school import Attendance
from src.models.attendance import AttendanceCreateRequest, AttendanceUpdateRequest

logger = logging.getLogger(__name__)


class AttendanceNotFoundError(NotFoundError):
    """Raised when attendance record is not found."""

    pass


class AttendanceService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_attendance(self, request: AttendanceCreateRequest) -> Attendance:
        """Record attendance for a class on a day."""
        record = Attendance(**request.model_dump())

        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)

        logger.info(
            "Recorded attendance for %s on %s: %d/%d",
            record.class_name,
            record.date.date().isoformat(),
            record.present,
            record.total,
        )

        return record

    async def update_attendance(self, request: AttendanceUpdateRequest) -> Attendance:
        """Correct an attendance record.

        Raises:
            AttendanceNotFoundError: If the record does not exist.
        """
        record = await self.get_attendance(request.id)

        for field, value in request.model_dump(exclude={"id"}).items():
            setattr(record, field, value)

        await self.db.commit()
        await self.db.refresh(record)

        logger.info("Updated attendance: %s", request.id)

        return record

    async def delete_attendance(self, attendance_id: int) -> None:
        record = await self.get_attendance(attendance_id)

        await self.db.delete(record)
        await self.db.commit()

        logger.info("Deleted attendance: %s", attendance_id)

    async def get_attendance(self, attendance_id: int) -> Attendance:
        result = await self.db.execute(select(Attendance).where(Attendance.id == attendance_id))
        record = result.scalar_one_or_none()

        if not record:
            raise AttendanceNotFoundError(f"Attendance {attendance_id} not found")

        return record
