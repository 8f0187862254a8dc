# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Result service."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.domains import result as domain_exports
from src.domains.result.service import EmptyResultBatchError, ResultNotFoundError, ResultService
from src.domains.student.service import StudentNotFoundError
from src.domains.subject.service import SubjectNotFoundError
from src.infrastructure.database.models.school import Result, Subject
from src.models.common import ErrorKind
from src.models.result import ResultCreateRequest, ResultEntry, ResultUpdateRequest


def scalar_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def scalars_result(values):
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    return result


@pytest.fixture
def result_service(mock_db):
    return ResultService(mock_db)


def entry(student_id: str, subject_id: int, marks: int = 80, grade: str = "A") -> ResultEntry:
    return ResultEntry(student_id=student_id, subject_id=subject_id, marks=marks, grade=grade)


class TestCreateResults:
    """Tests for batch result insertion."""

    @pytest.mark.asyncio
    async def test_inserts_whole_batch(self, result_service, mock_db):
        """Test that a valid batch is added and committed in one transaction."""
        mock_db.execute.side_effect = [
            scalars_result(["s1"]),
            scalars_result([Subject(id=2, name="Math"), Subject(id=3, name="Physics")]),
        ]
        request = ResultCreateRequest(entries=[entry("s1", 2), entry("s1", 3, marks=65, grade="C")])

        results = await result_service.create_results(request)

        assert [(r.student_id, r.subject_id, r.marks, r.grade) for r in results] == [
            ("s1", 2, 80, "A"),
            ("s1", 3, 65, "C"),
        ]
        assert all(isinstance(r, Result) for r in results)
        mock_db.add_all.assert_called_once_with(results)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_batch(self, result_service, mock_db):
        with pytest.raises(EmptyResultBatchError, match="No data provided for insertion."):
            await result_service.create_results(ResultCreateRequest())

        mock_db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_student(self, result_service, mock_db):
        mock_db.execute.return_value = scalars_result(["s1"])
        request = ResultCreateRequest(entries=[entry("s1", 2), entry("s9", 2)])

        with pytest.raises(StudentNotFoundError, match="Student with ID 's9' not found."):
            await result_service.create_results(request)

        mock_db.add_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_student_shares_student_error_type(self, result_service, mock_db):
        """Test that callers catching the student error also catch batch lookups."""
        mock_db.execute.return_value = scalars_result([])

        with pytest.raises(StudentNotFoundError) as exc_info:
            await result_service.create_results(ResultCreateRequest(entries=[entry("s9", 2)]))

        assert domain_exports.StudentNotFoundError is StudentNotFoundError
        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_invalid_subject_adds_nothing(self, result_service, mock_db):
        """Test that one unknown subject rejects the whole batch."""
        mock_db.execute.side_effect = [
            scalars_result(["s1"]),
            scalars_result([Subject(id=2, name="Math")]),
        ]
        request = ResultCreateRequest(entries=[entry("s1", 2), entry("s1", 42)])

        with pytest.raises(SubjectNotFoundError, match="One or more subject IDs are invalid."):
            await result_service.create_results(request)

        mock_db.add_all.assert_not_called()
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_rolls_back(self, result_service, mock_db):
        mock_db.execute.side_effect = [
            scalars_result(["s1"]),
            scalars_result([Subject(id=2, name="Math")]),
        ]
        mock_db.commit.side_effect = IntegrityError("INSERT INTO results", {}, Exception("fk"))

        with pytest.raises(IntegrityError):
            await result_service.create_results(ResultCreateRequest(entries=[entry("s1", 2)]))

        mock_db.rollback.assert_awaited_once()


class TestUpdateResult:
    """Tests for single result updates."""

    @pytest.mark.asyncio
    async def test_grade_kept_when_omitted(self, result_service, mock_db):
        existing = MagicMock()
        existing.grade = "B"
        mock_db.execute.return_value = scalar_result(existing)

        result = await result_service.update_result(
            ResultUpdateRequest(id="r1", student_id="s1", subject_id=2, marks=91)
        )

        assert result.marks == 91
        assert result.grade == "B"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_per_subject_form_shape(self, result_service, mock_db):
        """Test that the first entry of a subjects list supplies subject and marks."""
        existing = MagicMock()
        mock_db.execute.return_value = scalar_result(existing)
        request = ResultUpdateRequest.model_validate(
            {
                "id": "r1",
                "studentId": "s1",
                "subjects": [{"subjectId": 2, "marks": 80, "grade": "A"}, {"subjectId": 3, "marks": 10}],
            }
        )

        result = await result_service.update_result(request)

        assert result.subject_id == 2
        assert result.marks == 80
        assert result.grade == "A"

    @pytest.mark.asyncio
    async def test_not_found(self, result_service, mock_db):
        mock_db.execute.return_value = scalar_result(None)

        with pytest.raises(ResultNotFoundError):
            await result_service.update_result(
                ResultUpdateRequest(id="missing", student_id="s1", subject_id=2, marks=10)
            )


class TestDeleteResult:
    @pytest.mark.asyncio
    async def test_delete_result(self, result_service, mock_db):
        existing = MagicMock()
        mock_db.execute.return_value = scalar_result(existing)

        await result_service.delete_result("r1")

        mock_db.delete.assert_awaited_once_with(existing)
        mock_db.commit.assert_awaited_once()
