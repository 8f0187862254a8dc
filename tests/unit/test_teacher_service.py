# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Teacher service."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.domains.accounts import AccountSync
from src.domains.errors import MissingIdError
from src.domains.subject.service import SubjectNotFoundError
from src.domains.teacher.service import TeacherNotFoundError, TeacherService
from src.infrastructure.database.models.school import Subject, Teacher, UserSex
from src.infrastructure.identity.client import IdentityProviderError
from src.models.teacher import TeacherCreateRequest, TeacherUpdateRequest


def scalar_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def scalars_result(values):
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    return result


@pytest.fixture
def teacher_service(mock_db, mock_identity):
    """Create teacher service with mock database and identity provider."""
    return TeacherService(mock_db, AccountSync(mock_db, mock_identity))


@pytest.fixture
def create_request(person_payload):
    return TeacherCreateRequest.model_validate(
        {**person_payload, "password": "secret-pass", "subjects": [2]}
    )


@pytest.fixture
def existing_teacher():
    teacher = MagicMock()
    teacher.id = "user_t1"
    teacher.username = "ann.jones"
    teacher.subjects = []
    return teacher


class TestCreateTeacher:
    """Tests for teacher creation."""

    @pytest.mark.asyncio
    async def test_create_teacher_success(self, teacher_service, mock_db, mock_identity, create_request, birthday):
        """Test that the profile row reuses the identity account id."""
        math = Subject(id=2, name="Math")
        mock_db.execute.return_value = scalars_result([math])

        teacher = await teacher_service.create_teacher(create_request)

        assert isinstance(teacher, Teacher)
        assert teacher.id == "user_new"
        assert teacher.username == "ann.jones"
        assert teacher.sex == UserSex.FEMALE
        assert teacher.birthday == birthday
        assert teacher.img is None
        assert teacher.subjects == [math]
        mock_identity.create_user.assert_awaited_once_with(
            username="ann.jones",
            password="secret-pass",
            first_name="Ann",
            last_name="Jones",
            public_metadata=None,
        )
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_password_not_stored(self, teacher_service, mock_db, create_request):
        mock_db.execute.return_value = scalars_result([Subject(id=2, name="Math")])

        teacher = await teacher_service.create_teacher(create_request)

        assert not hasattr(teacher, "password")

    @pytest.mark.asyncio
    async def test_unknown_subject_skips_identity(self, teacher_service, mock_db, mock_identity, create_request):
        mock_db.execute.return_value = scalars_result([])

        with pytest.raises(SubjectNotFoundError):
            await teacher_service.create_teacher(create_request)

        mock_identity.create_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_removes_account(self, teacher_service, mock_db, mock_identity, create_request):
        """Test that a failed insert deletes the identity account again."""
        mock_db.execute.return_value = scalars_result([Subject(id=2, name="Math")])
        mock_db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate email"))

        with pytest.raises(IntegrityError):
            await teacher_service.create_teacher(create_request)

        mock_identity.delete_user.assert_awaited_once_with("user_new")


class TestUpdateTeacher:
    """Tests for teacher updates."""

    @pytest.mark.asyncio
    async def test_missing_id_rejected_before_any_call(
        self, teacher_service, mock_db, mock_identity, person_payload
    ):
        request = TeacherUpdateRequest.model_validate({**person_payload, "id": ""})

        with pytest.raises(MissingIdError):
            await teacher_service.update_teacher(request)

        mock_db.execute.assert_not_awaited()
        mock_identity.update_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_replaces_subjects(
        self, teacher_service, mock_db, mock_identity, existing_teacher, person_payload
    ):
        physics = Subject(id=5, name="Physics")
        mock_db.execute.side_effect = [scalar_result(existing_teacher), scalars_result([physics])]
        request = TeacherUpdateRequest.model_validate(
            {**person_payload, "id": "user_t1", "surname": "Smith", "subjects": [5]}
        )

        teacher = await teacher_service.update_teacher(request)

        assert teacher.surname == "Smith"
        assert teacher.subjects == [physics]
        mock_identity.update_user.assert_awaited_once_with(
            "user_t1",
            username="ann.jones",
            password=None,
            first_name="Ann",
            last_name="Smith",
        )
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_identity_failure_rolls_back(
        self, teacher_service, mock_db, mock_identity, existing_teacher, person_payload
    ):
        mock_db.execute.side_effect = [scalar_result(existing_teacher), scalars_result([])]
        mock_identity.update_user.side_effect = IdentityProviderError("username taken", status_code=422)
        request = TeacherUpdateRequest.model_validate({**person_payload, "id": "user_t1"})

        with pytest.raises(IdentityProviderError):
            await teacher_service.update_teacher(request)

        mock_db.rollback.assert_awaited_once()
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_not_found(self, teacher_service, mock_db, person_payload):
        mock_db.execute.return_value = scalar_result(None)
        request = TeacherUpdateRequest.model_validate({**person_payload, "id": "user_missing"})

        with pytest.raises(TeacherNotFoundError):
            await teacher_service.update_teacher(request)


class TestDeleteTeacher:
    @pytest.mark.asyncio
    async def test_delete_teacher(self, teacher_service, mock_db, mock_identity, existing_teacher):
        mock_db.execute.return_value = scalar_result(existing_teacher)

        await teacher_service.delete_teacher("user_t1")

        mock_db.delete.assert_awaited_once_with(existing_teacher)
        mock_identity.delete_user.assert_awaited_once_with("user_t1")
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing_teacher(self, teacher_service, mock_db, mock_identity):
        mock_db.execute.return_value = scalar_result(None)

        with pytest.raises(TeacherNotFoundError):
            await teacher_service.delete_teacher("user_missing")

        mock_identity.delete_user.assert_not_awaited()
