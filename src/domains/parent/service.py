# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent Service - manages parent accounts and profiles.

Parent accounts carry ``{"role": "parent"}`` in their identity metadata so
the session layer can recognise them. Missing profile fields are stored as
empty strings.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.accounts import AccountChanges, AccountSync, NewAccount
from src.domains.errors import MissingIdError, NotFoundError
from src.infrastructure.database.models.school import Parent
from src.models.parent import ParentCreateRequest, ParentUpdateRequest

logger = logging.getLogger(__name__)

PARENT_ROLE = "parent"

PROFILE_FIELDS = ("username", "name", "surname", "email", "phone", "address")


class ParentNotFoundError(NotFoundError):
    """Raised when parent is not found."""

    pass


class ParentService:
    """Service for parent account management."""

    def __init__(self, db: AsyncSession, accounts: AccountSync) -> None:
        self.db = db
        self.accounts = accounts

    async def create_parent(self, request: ParentCreateRequest) -> Parent:
        """Create a parent account and profile.

        Raises:
            IdentityProviderError: If the account cannot be created.
        """
        parent = await self.accounts.create(
            NewAccount(
                username=request.username,
                password=request.password,
                first_name=request.name,
                last_name=request.surname,
                public_metadata={"role": PARENT_ROLE},
            ),
            lambda user_id: Parent(
                id=user_id,
                **request.model_dump(include=set(PROFILE_FIELDS)),
            ),
        )

        logger.info("Created parent: %s (%s)", parent.username, parent.id)

        return parent

    async def update_parent(self, request: ParentUpdateRequest) -> Parent:
        """Update a parent account and profile.

        Raises:
            MissingIdError: If no id was supplied.
            ParentNotFoundError: If parent not found.
            IdentityProviderError: If the account update is rejected.
        """
        if not request.id:
            raise MissingIdError("Parent")

        parent = await self.get_parent(request.id)

        for field in PROFILE_FIELDS:
            setattr(parent, field, getattr(request, field))

        await self.accounts.update(
            parent.id,
            AccountChanges(
                username=request.username,
                first_name=request.name,
                last_name=request.surname,
                password=request.password,
            ),
        )

        logger.info("Updated parent: %s", parent.id)

        return parent

    async def delete_parent(self, parent_id: str) -> None:
        """Delete a parent profile and account.

        A parent still linked to students cannot be deleted; the store
        rejects the flush and the account is left untouched.
        """
        parent = await self.get_parent(parent_id)

        await self.accounts.delete(parent, parent_id)

        logger.info("Deleted parent: %s", parent_id)

    async def get_parent(self, parent_id: str) -> Parent:
        result = await self.db.execute(select(Parent).where(Parent.id == parent_id))
        parent = result.scalar_one_or_none()

        if not parent:
            raise ParentNotFoundError(f"Parent {parent_id} not found")

        return parent
