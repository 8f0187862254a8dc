# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for database integration tests.

Runs against TEST_DATABASE_URL when set, otherwise against an in-memory
SQLite database with foreign keys enforced.
"""

import itertools
import os
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.domains.auth.session import SessionContext
from src.domains.mutations import MutationService
from src.infrastructure.database.models.base import Base
from src.infrastructure.database.models.school import (
    Class,
    Grade,
    Lesson,
    Parent,
    Student,
    Subject,
    Teacher,
    UserSex,
)
from src.infrastructure.identity.client import IdentityProviderClient, IdentityUser

BIRTHDAY = datetime(1985, 4, 12, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def database_url() -> str:
    """Get database URL for tests."""
    return os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest_asyncio.fixture(scope="function")
async def db_engine(database_url: str):
    """Create async engine with a fresh schema."""
    if database_url.startswith("sqlite"):
        engine = create_async_engine(
            database_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:
        engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session for database tests."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def identity() -> AsyncMock:
    """Identity provider issuing a distinct account id per created user."""
    counter = itertools.count(1)

    async def create_user(**kwargs) -> IdentityUser:
        return IdentityUser(id=f"user_{next(counter)}", username=kwargs.get("username"))

    client = AsyncMock(spec=IdentityProviderClient)
    client.create_user.side_effect = create_user
    client.update_user.return_value = IdentityUser(id="user_updated")
    client.delete_user.return_value = None
    return client


@pytest.fixture
def mutations(db_session, identity) -> MutationService:
    return MutationService(db_session, identity, SessionContext("user_admin", "admin"))


def profile(username: str) -> dict:
    """Teacher/student profile columns for seeded rows."""
    return {
        "username": username,
        "name": username.title(),
        "surname": "Seed",
        "address": "1 School Lane",
        "blood_type": "O+",
        "sex": UserSex.MALE,
        "birthday": BIRTHDAY,
    }


@pytest_asyncio.fixture
async def school(db_session) -> dict:
    """Seed one grade, class, lesson, teacher, parent and student.

    Returns:
        Primary keys of the seeded rows. ``spare_subject_id`` is taught by
        nobody and used by no lesson.
    """
    grade = Grade(level=1)
    maths = Subject(name="Maths")
    spare_subject = Subject(name="Art")
    teacher = Teacher(id="user_teacher", subjects=[maths], **profile("mr.smith"))
    parent = Parent(id="user_parent", username="mrs.brown", name="Jane", surname="Brown")
    db_session.add_all([grade, maths, spare_subject, teacher, parent])
    await db_session.flush()

    class_ = Class(name="1A", capacity=30, grade_id=grade.id, supervisor_id=teacher.id)
    db_session.add(class_)
    await db_session.flush()

    lesson = Lesson(
        name="Maths 1A",
        day="MONDAY",
        start_time=datetime(2025, 3, 3, 9, tzinfo=timezone.utc),
        end_time=datetime(2025, 3, 3, 10, tzinfo=timezone.utc),
        subject_id=maths.id,
        class_id=class_.id,
        teacher_id=teacher.id,
    )
    student = Student(
        id="user_student",
        parent_id=parent.id,
        class_id=class_.id,
        grade_id=grade.id,
        **profile("tom.brown"),
    )
    db_session.add_all([lesson, student])
    await db_session.commit()

    return {
        "grade_id": grade.id,
        "subject_id": maths.id,
        "spare_subject_id": spare_subject.id,
        "teacher_id": teacher.id,
        "parent_id": parent.id,
        "class_id": class_.id,
        "lesson_id": lesson.id,
        "student_id": student.id,
    }
