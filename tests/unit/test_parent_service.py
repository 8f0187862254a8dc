# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for Parent service."""

from unittest.mock import MagicMock

import pytest

from src.domains.accounts import AccountSync
from src.domains.errors import MissingIdError
from src.domains.parent.service import ParentNotFoundError, ParentService
from src.infrastructure.database.models.school import Parent
from src.models.parent import ParentCreateRequest, ParentUpdateRequest


def scalar_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.fixture
def parent_service(mock_db, mock_identity):
    return ParentService(mock_db, AccountSync(mock_db, mock_identity))


class TestCreateParent:
    """Tests for parent creation."""

    @pytest.mark.asyncio
    async def test_missing_fields_stored_empty(self, parent_service, mock_db, mock_identity):
        """Test that absent profile fields become empty strings."""
        request = ParentCreateRequest.model_validate(
            {"username": "pat.smith", "password": "secret-pass", "phone": None}
        )

        parent = await parent_service.create_parent(request)

        assert isinstance(parent, Parent)
        assert parent.id == "user_new"
        assert parent.name == ""
        assert parent.surname == ""
        assert parent.email == ""
        assert parent.phone == ""
        assert parent.address == ""
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_account_marked_as_parent(self, parent_service, mock_identity):
        request = ParentCreateRequest(username="pat.smith", password="secret-pass", name="Pat")

        await parent_service.create_parent(request)

        assert mock_identity.create_user.await_args.kwargs["public_metadata"] == {"role": "parent"}
        assert mock_identity.create_user.await_args.kwargs["first_name"] == "Pat"


class TestUpdateParent:
    @pytest.mark.asyncio
    async def test_missing_id(self, parent_service, mock_db, mock_identity):
        with pytest.raises(MissingIdError, match="Parent id is required"):
            await parent_service.update_parent(ParentUpdateRequest(username="pat.smith"))

        mock_db.execute.assert_not_awaited()
        mock_identity.update_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_parent(self, parent_service, mock_db, mock_identity):
        existing = MagicMock()
        existing.id = "user_p1"
        mock_db.execute.return_value = scalar_result(existing)

        parent = await parent_service.update_parent(
            ParentUpdateRequest(id="user_p1", username="pat.smith", address="2 Elm Road")
        )

        assert parent.address == "2 Elm Road"
        assert parent.email == ""
        mock_identity.update_user.assert_awaited_once()
        mock_db.commit.assert_awaited_once()


class TestDeleteParent:
    @pytest.mark.asyncio
    async def test_delete_missing_parent(self, parent_service, mock_db, mock_identity):
        mock_db.execute.return_value = scalar_result(None)

        with pytest.raises(ParentNotFoundError):
            await parent_service.delete_parent("user_missing")

        mock_identity.delete_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_parent(self, parent_service, mock_db, mock_identity):
        existing = MagicMock()
        mock_db.execute.return_value = scalar_result(existing)

        await parent_service.delete_parent("user_p1")

        mock_db.delete.assert_awaited_once_with(existing)
        mock_identity.delete_user.assert_awaited_once_with("user_p1")
        mock_db.commit.assert_awaited_once()
