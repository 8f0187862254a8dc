# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School domain tables.

Teacher, Student and Parent rows share their primary key with the
identity provider's user id. Subject/Class/Grade/Lesson/Exam/Attendance
use integer keys; Result uses a string (UUID) key.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin


class UserSex(str, enum.Enum):
    """Sex recorded on teacher and student profiles."""

    MALE = "MALE"
    FEMALE = "FEMALE"


teacher_subjects = Table(
    "teacher_subjects",
    Base.metadata,
    Column("teacher_id", String(64), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
    Column("subject_id", Integer, ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True),
)


class Grade(Base, TimestampMixin):
    __tablename__ = "grades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    level: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Grade(id={self.id}, level={self.level})>"


class Subject(Base, TimestampMixin):
    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    teachers: Mapped[list[Teacher]] = relationship(
        secondary=teacher_subjects,
        back_populates="subjects",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Subject(id={self.id}, name={self.name})>"


class Class(Base, TimestampMixin):
    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    supervisor_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True
    )
    grade_id: Mapped[int] = mapped_column(Integer, ForeignKey("grades.id"), nullable=False)

    students: Mapped[list[Student]] = relationship(back_populates="class_")

    def __repr__(self) -> str:
        return f"<Class(id={self.id}, name={self.name}, capacity={self.capacity})>"


class Teacher(Base, TimestampMixin):
    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    img: Mapped[str | None] = mapped_column(String(500), nullable=True)
    blood_type: Mapped[str] = mapped_column(String(8), nullable=False)
    sex: Mapped[UserSex] = mapped_column(Enum(UserSex, name="user_sex"), nullable=False)
    birthday: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    subjects: Mapped[list[Subject]] = relationship(
        secondary=teacher_subjects,
        back_populates="teachers",
        lazy="selectin",
    )
    lessons: Mapped[list[Lesson]] = relationship(back_populates="teacher")

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, username={self.username})>"


class Parent(Base, TimestampMixin):
    __tablename__ = "parents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    surname: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    students: Mapped[list[Student]] = relationship(back_populates="parent")

    def __repr__(self) -> str:
        return f"<Parent(id={self.id}, username={self.username})>"


class Student(Base, TimestampMixin):
    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    img: Mapped[str | None] = mapped_column(String(500), nullable=True)
    blood_type: Mapped[str] = mapped_column(String(8), nullable=False)
    sex: Mapped[UserSex] = mapped_column(Enum(UserSex, name="user_sex"), nullable=False)
    birthday: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    parent_id: Mapped[str] = mapped_column(String(64), ForeignKey("parents.id"), nullable=False)
    class_id: Mapped[int] = mapped_column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    grade_id: Mapped[int] = mapped_column(Integer, ForeignKey("grades.id"), nullable=False)

    parent: Mapped[Parent] = relationship(back_populates="students")
    class_: Mapped[Class] = relationship(back_populates="students")

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, username={self.username}, class_id={self.class_id})>"


class Lesson(Base, TimestampMixin):
    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    day: Mapped[str] = mapped_column(String(16), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    subject_id: Mapped[int] = mapped_column(Integer, ForeignKey("subjects.id"), nullable=False)
    class_id: Mapped[int] = mapped_column(Integer, ForeignKey("classes.id"), nullable=False)
    teacher_id: Mapped[str] = mapped_column(String(64), ForeignKey("teachers.id"), nullable=False, index=True)

    teacher: Mapped[Teacher] = relationship(back_populates="lessons")
    exams: Mapped[list[Exam]] = relationship(back_populates="lesson")

    def __repr__(self) -> str:
        return f"<Lesson(id={self.id}, name={self.name}, teacher_id={self.teacher_id})>"


class Exam(Base, TimestampMixin):
    __tablename__ = "exams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    lesson_id: Mapped[int] = mapped_column(Integer, ForeignKey("lessons.id"), nullable=False)

    lesson: Mapped[Lesson] = relationship(back_populates="exams")

    def __repr__(self) -> str:
        return f"<Exam(id={self.id}, title={self.title}, lesson_id={self.lesson_id})>"


class Result(Base, TimestampMixin):
    __tablename__ = "results"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    subject_id: Mapped[int] = mapped_column(Integer, ForeignKey("subjects.id"), nullable=False)
    marks: Mapped[int] = mapped_column(Integer, nullable=False)
    grade: Mapped[str] = mapped_column(String(8), nullable=False)

    def __repr__(self) -> str:
        return f"<Result(id={self.id}, student_id={self.student_id}, subject_id={self.subject_id})>"


class Attendance(Base, TimestampMixin):
    __tablename__ = "attendance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    class_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    day: Mapped[str] = mapped_column(String(16), nullable=False)
    present: Mapped[int] = mapped_column(Integer, nullable=False)
    total: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Attendance(id={self.id}, class_name={self.class_name}, date={self.date})>"
