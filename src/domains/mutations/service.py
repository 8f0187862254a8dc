# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mutation facade for the school management forms.

Every handler takes ``(previous_state, payload)`` and returns a
MutationResult; errors never escape. ``previous_state`` is the result of
the previous submission of the same form and is ignored.

Payloads are request model instances, plain mappings (camelCase or
snake_case keys) or, for deletes, form data with a single ``id`` field.

Example:
    >>> async with get_session() as db:
    ...     mutations = MutationService(db, identity, session)
    ...     result = await mutations.create_class(None, {"name": "1A", "capacity": 30, "gradeId": 1})
    >>> result.success
    True
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import MutationPolicySettings
from src.domains.accounts import AccountSync
from src.domains.attendance import AttendanceService
from src.domains.auth.session import SessionContext
from src.domains.class_ import ClassService
from src.domains.errors import InvalidPayloadError, MissingIdError, MutationError
from src.domains.exam import ExamService
from src.domains.parent import ParentService
from src.domains.result import ResultService
from src.domains.student import StudentService
from src.domains.subject import SubjectService
from src.domains.teacher import TeacherService
from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.identity.client import IdentityProviderClient, IdentityProviderError
from src.models.attendance import AttendanceCreateRequest, AttendanceUpdateRequest
from src.models.class_ import ClassCreateRequest, ClassUpdateRequest
from src.models.common import ErrorKind, MutationFailure, MutationResult, MutationSuccess
from src.models.exam import ExamCreateRequest, ExamUpdateRequest
from src.models.parent import ParentCreateRequest, ParentUpdateRequest
from src.models.result import ResultCreateRequest, ResultUpdateRequest
from src.models.student import StudentCreateRequest, StudentUpdateRequest
from src.models.subject import SubjectCreateRequest, SubjectUpdateRequest
from src.models.teacher import TeacherCreateRequest, TeacherUpdateRequest
from src.utils.logging import log_context

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a payload into a request model.

    Raises:
        InvalidPayloadError: If the payload does not validate.
    """
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc']) or 'payload'}: {error['msg']}"
            for error in e.errors()
        )
        raise InvalidPayloadError(f"Invalid {model.__name__} payload: {details}") from e


def _form_id(form: Any, entity: str, id_type: type[int] | type[str]) -> Any:
    """Read the ``id`` field from delete form data.

    Raises:
        MissingIdError: If the form has no id.
        InvalidPayloadError: If the id is not a valid integer where one is expected.
    """
    value = form.get("id") if hasattr(form, "get") else None
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        raise MissingIdError(entity)

    if id_type is int:
        if isinstance(value, bool):
            raise InvalidPayloadError(f"Invalid id: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise InvalidPayloadError(f"Invalid id: {value!r}") from e

    return str(value)


class MutationService:
    """Create/update/delete handlers for every school entity.

    Built per request around one database session.

    Attributes:
        db: Async database session.
        identity: Identity provider client.
        session: Calling user's context.
        policy: Mutation policy flags.
    """

    def __init__(
        self,
        db: AsyncSession,
        identity: IdentityProviderClient,
        session: SessionContext | None = None,
        policy: MutationPolicySettings | None = None,
    ) -> None:
        self.db = db
        self.identity = identity
        self.session = session or SessionContext.anonymous()
        self.policy = policy or MutationPolicySettings()

        accounts = AccountSync(db, identity, compensate=self.policy.compensate_identity)

        self.subjects = SubjectService(db)
        self.classes = ClassService(db)
        self.teachers = TeacherService(db, accounts)
        self.students = StudentService(db, accounts)
        self.parents = ParentService(db, accounts)
        self.exams = ExamService(
            db,
            self.session,
            require_owner_on_delete=self.policy.exam_delete_requires_owner,
        )
        self.results = ResultService(db)
        self.attendance = AttendanceService(db)

    # Subjects

    async def create_subject(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "create_subject",
            lambda: self.subjects.create_subject(_parse(SubjectCreateRequest, payload)),
        )

    async def update_subject(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_subject",
            lambda: self.subjects.update_subject(_parse(SubjectUpdateRequest, payload)),
        )

    async def delete_subject(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_subject",
            lambda: self.subjects.delete_subject(_form_id(form, "Subject", int)),
        )

    # Classes

    async def create_class(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "create_class",
            lambda: self.classes.create_class(_parse(ClassCreateRequest, payload)),
        )

    async def update_class(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_class",
            lambda: self.classes.update_class(_parse(ClassUpdateRequest, payload)),
        )

    async def delete_class(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_class",
            lambda: self.classes.delete_class(_form_id(form, "Class", int)),
        )

    # Teachers

    async def create_teacher(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "create_teacher",
            lambda: self.teachers.create_teacher(_parse(TeacherCreateRequest, payload)),
        )

    async def update_teacher(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_teacher",
            lambda: self.teachers.update_teacher(_parse(TeacherUpdateRequest, payload)),
        )

    async def delete_teacher(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_teacher",
            lambda: self.teachers.delete_teacher(_form_id(form, "Teacher", str)),
        )

    # Students

    async def create_student(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "create_student",
            lambda: self.students.create_student(_parse(StudentCreateRequest, payload)),
        )

    async def update_student(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_student",
            lambda: self.students.update_student(_parse(StudentUpdateRequest, payload)),
        )

    async def delete_student(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_student",
            lambda: self.students.delete_student(_form_id(form, "Student", str)),
        )

    # Parents

    async def create_parent(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "create_parent",
            lambda: self.parents.create_parent(_parse(ParentCreateRequest, payload)),
        )

    async def update_parent(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_parent",
            lambda: self.parents.update_parent(_parse(ParentUpdateRequest, payload)),
        )

    async def delete_parent(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_parent",
            lambda: self.parents.delete_parent(_form_id(form, "Parent", str)),
        )

    # Exams

    async def create_exam(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "create_exam",
            lambda: self.exams.create_exam(_parse(ExamCreateRequest, payload)),
        )

    async def update_exam(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_exam",
            lambda: self.exams.update_exam(_parse(ExamUpdateRequest, payload)),
        )

    async def delete_exam(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_exam",
            lambda: self.exams.delete_exam(_form_id(form, "Exam", int)),
        )

    # Results

    async def create_result(self, previous_state: Any, payload: Any) -> MutationResult:
        """Insert a batch of results.

        ``payload`` may be a ResultCreateRequest, a mapping with an
        ``entries`` list, or the bare list of entries.
        """
        if isinstance(payload, list | tuple):
            payload = {"entries": list(payload)}
        return await self._run(
            "create_result",
            lambda: self.results.create_results(_parse(ResultCreateRequest, payload)),
        )

    async def update_result(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_result",
            lambda: self.results.update_result(_parse(ResultUpdateRequest, payload)),
        )

    async def delete_result(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_result",
            lambda: self.results.delete_result(_form_id(form, "Result", str)),
        )

    # Attendance

    async def create_attendance(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "create_attendance",
            lambda: self.attendance.create_attendance(_parse(AttendanceCreateRequest, payload)),
        )

    async def update_attendance(self, previous_state: Any, payload: Any) -> MutationResult:
        return await self._run(
            "update_attendance",
            lambda: self.attendance.update_attendance(_parse(AttendanceUpdateRequest, payload)),
        )

    async def delete_attendance(self, previous_state: Any, form: Any) -> MutationResult:
        return await self._run(
            "delete_attendance",
            lambda: self.attendance.delete_attendance(_form_id(form, "Attendance", int)),
        )

    async def _run(
        self,
        operation: str,
        action: Callable[[], Awaitable[Any]],
    ) -> MutationResult:
        """Run one mutation and convert its outcome into a MutationResult."""
        with log_context(operation=operation, caller_id=self.session.user_id):
            try:
                data = await action()
            except MutationError as e:
                logger.warning("%s rejected: %s", operation, e)
                return await self._fail(e.kind, str(e))
            except IdentityProviderError as e:
                logger.exception("%s failed at identity provider: %s", operation, e.message)
                return await self._fail(ErrorKind.IDENTITY, e.message)
            except (SQLAlchemyError, DatabaseError) as e:
                logger.exception("%s failed in database", operation)
                return await self._fail(ErrorKind.STORE, _store_message(e))
            except Exception as e:
                logger.exception("%s failed unexpectedly", operation)
                return await self._fail(ErrorKind.UNEXPECTED, str(e) or type(e).__name__)

            return MutationSuccess(data=data)

    async def _fail(self, kind: ErrorKind, message: str) -> MutationFailure:
        try:
            await self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback after failed mutation also failed")
        return MutationFailure(kind=kind, message=message)


def _store_message(error: Exception) -> str:
    if isinstance(error, DatabaseError):
        return error.message
    original = getattr(error, "orig", None)
    return str(original) if original is not None else str(error)
