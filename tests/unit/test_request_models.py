# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for mutation request models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.infrastructure.database.models.school import UserSex
from src.models.attendance import AttendanceCreateRequest
from src.models.class_ import ClassCreateRequest
from src.models.common import ErrorKind, MutationFailure, MutationSuccess
from src.models.exam import ExamCreateRequest
from src.models.parent import ParentCreateRequest
from src.models.result import ResultCreateRequest, ResultUpdateRequest
from src.models.teacher import TeacherCreateRequest, TeacherUpdateRequest


class TestPersonFields:
    def test_camel_case_form(self, person_payload) -> None:
        request = TeacherCreateRequest.model_validate({**person_payload, "password": "secret-pass"})

        assert request.blood_type == "A+"
        assert request.sex == UserSex.FEMALE
        assert request.img is None
        assert request.birthday == datetime(1985, 4, 12, tzinfo=timezone.utc)

    def test_short_password_rejected(self, person_payload) -> None:
        with pytest.raises(ValidationError, match="at least 8 characters"):
            TeacherCreateRequest.model_validate({**person_payload, "password": "short"})

    def test_empty_password_on_update_means_unchanged(self, person_payload) -> None:
        request = TeacherUpdateRequest.model_validate({**person_payload, "id": "user_t1", "password": ""})

        assert request.password == ""

    def test_invalid_email(self, person_payload) -> None:
        with pytest.raises(ValidationError):
            TeacherCreateRequest.model_validate(
                {**person_payload, "email": "not-an-email", "password": "secret-pass"}
            )

    @pytest.mark.parametrize("username", ["ab", "a" * 21])
    def test_username_length(self, person_payload, username) -> None:
        with pytest.raises(ValidationError):
            TeacherCreateRequest.model_validate(
                {**person_payload, "username": username, "password": "secret-pass"}
            )


class TestClassRequest:
    def test_blank_supervisor(self) -> None:
        request = ClassCreateRequest.model_validate({"name": "1A", "capacity": "30", "gradeId": "1", "supervisorId": " "})

        assert request.supervisor_id is None
        assert request.capacity == 30


class TestExamRequest:
    def test_millisecond_times(self) -> None:
        request = ExamCreateRequest(
            title="Quiz",
            start_time=1_741_939_200_000,
            end_time=1_741_942_800_000,
            lesson_id=1,
        )

        assert request.start_time == datetime(2025, 3, 14, 8, 0, tzinfo=timezone.utc)
        assert request.end_time == datetime(2025, 3, 14, 9, 0, tzinfo=timezone.utc)

    def test_end_must_follow_start(self) -> None:
        with pytest.raises(ValidationError, match="end time must be after"):
            ExamCreateRequest(
                title="Quiz",
                start_time="2025-03-14T09:00:00Z",
                end_time="2025-03-14T09:00:00Z",
                lesson_id=1,
            )


class TestAttendanceRequest:
    def test_present_cannot_exceed_total(self) -> None:
        with pytest.raises(ValidationError, match="Present count cannot exceed total"):
            AttendanceCreateRequest(class_name="1A", date="2025-03-14", day="Friday", present=21, total=20)

    def test_invalid_date(self) -> None:
        with pytest.raises(ValidationError):
            AttendanceCreateRequest(class_name="1A", date="yesterday", day="Friday", present=1, total=20)

    def test_out_of_range_timestamp(self) -> None:
        """Test that a timestamp beyond the datetime range is a validation error."""
        with pytest.raises(ValidationError, match="Timestamp out of range"):
            AttendanceCreateRequest(class_name="1A", date=10**20, day="Friday", present=1, total=20)


class TestParentRequest:
    def test_defaults(self) -> None:
        request = ParentCreateRequest(username="pat.smith", password="secret-pass")

        assert (request.name, request.surname, request.email, request.phone, request.address) == ("", "", "", "", "")


class TestResultRequests:
    def test_create_entries_from_camel_case(self) -> None:
        request = ResultCreateRequest.model_validate(
            {"entries": [{"studentId": "s1", "subjectId": "2", "marks": "80", "grade": "A"}]}
        )

        assert request.entries[0].subject_id == 2
        assert request.entries[0].marks == 80

    def test_negative_marks_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ResultCreateRequest.model_validate(
                {"entries": [{"studentId": "s1", "subjectId": 2, "marks": -1, "grade": "F"}]}
            )

    def test_update_lifts_first_subject(self) -> None:
        request = ResultUpdateRequest.model_validate(
            {"id": "r1", "studentId": "s1", "subjects": [{"subject_id": 4, "marks": 55}]}
        )

        assert request.subject_id == 4
        assert request.marks == 55
        assert request.grade is None

    def test_update_requires_a_subject_entry(self) -> None:
        with pytest.raises(ValidationError, match="At least one subject entry"):
            ResultUpdateRequest.model_validate({"id": "r1", "studentId": "s1", "subjects": []})

    @pytest.mark.parametrize("subjects", [[5], ["math"], 5])
    def test_update_rejects_non_object_subjects(self, subjects) -> None:
        with pytest.raises(ValidationError):
            ResultUpdateRequest.model_validate({"id": "r1", "studentId": "s1", "subjects": subjects})


class TestMutationResults:
    def test_failure_serializes_kind(self) -> None:
        failure = MutationFailure(kind=ErrorKind.NOT_FOUND, message="Student with ID 's9' not found.")

        assert failure.model_dump(mode="json") == {
            "success": False,
            "error": True,
            "kind": "not_found",
            "message": "Student with ID 's9' not found.",
        }

    def test_success_defaults(self) -> None:
        assert MutationSuccess().model_dump() == {"success": True, "error": False, "data": None}
