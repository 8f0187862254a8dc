# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Coordinated writes to the identity provider and the school database.

Teacher, student and parent rows share their id with an identity account,
so every create/update/delete touches two systems that cannot share a
transaction. AccountSync orders the two writes so that a failure leaves
them consistent:

- create: the account is created first (its id is the row's key); if the
  row cannot be committed the account is deleted again.
- update/delete: the row change is flushed first (constraint violations
  surface before the provider is called), then the account is changed,
  then the row commits. A provider failure rolls the row change back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models.base import Base
from src.infrastructure.identity.client import IdentityProviderClient, IdentityProviderError

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=Base)


@dataclass
class NewAccount:
    """Identity account to create alongside a row."""

    username: str
    password: str
    first_name: str
    last_name: str
    public_metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class AccountChanges:
    """Identity account fields to update; empty password keeps the current one."""

    username: str
    first_name: str
    last_name: str
    password: str = ""


class AccountSync:
    """Runs identity-account and row writes as one unit.

    Attributes:
        db: Async database session.
        identity: Identity provider client.
        compensate: Delete a new account again when its row fails to commit.
    """

    def __init__(
        self,
        db: AsyncSession,
        identity: IdentityProviderClient,
        compensate: bool = True,
    ) -> None:
        self.db = db
        self.identity = identity
        self.compensate = compensate

    async def create(self, account: NewAccount, build_row: Callable[[str], RowT]) -> RowT:
        """Create an identity account, then the row keyed by its id.

        Args:
            account: Account to create.
            build_row: Builds the ORM row from the new account id.

        Returns:
            The committed row.

        Raises:
            IdentityProviderError: If the account cannot be created.
            SQLAlchemyError: If the row cannot be committed.
        """
        user = await self.identity.create_user(
            username=account.username,
            password=account.password,
            first_name=account.first_name,
            last_name=account.last_name,
            public_metadata=account.public_metadata or None,
        )

        try:
            row = build_row(user.id)
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        except Exception:
            await self.db.rollback()
            if self.compensate:
                await self._remove_orphan(user.id)
            raise

        return row

    async def update(self, user_id: str, changes: AccountChanges) -> None:
        """Flush pending row changes, update the account, then commit.

        The caller mutates the loaded row before calling this.

        Args:
            user_id: Account (and row) id.
            changes: Account fields to send to the provider.

        Raises:
            IdentityProviderError: If the provider rejects the update.
            SQLAlchemyError: If the row changes cannot be written.
        """
        try:
            await self.db.flush()
            await self.identity.update_user(
                user_id,
                username=changes.username,
                password=changes.password or None,
                first_name=changes.first_name,
                last_name=changes.last_name,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def delete(self, row: Base, user_id: str) -> None:
        """Delete a row and its identity account.

        Args:
            row: Loaded ORM row to delete.
            user_id: Account (and row) id.

        Raises:
            IdentityProviderError: If the provider rejects the deletion.
            SQLAlchemyError: If the row cannot be deleted.
        """
        try:
            await self.db.delete(row)
            await self.db.flush()
            await self.identity.delete_user(user_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _remove_orphan(self, user_id: str) -> None:
        try:
            await self.identity.delete_user(user_id)
            logger.warning("Removed identity account %s after failed row write", user_id)
        except IdentityProviderError as e:
            logger.error(
                "Identity account %s is orphaned, compensation failed: %s",
                user_id,
                e.message,
            )
