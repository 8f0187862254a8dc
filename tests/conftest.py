# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

Unit tests run without a database or identity provider: the async session
and the identity client are replaced with mocks.
"""

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.infrastructure.identity.client import IdentityProviderClient, IdentityUser


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as running against a real database"
    )


# =============================================================================
# Infrastructure Fixtures
# =============================================================================


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def mock_identity() -> AsyncMock:
    """Create mock identity provider client that issues user_new as the account id."""
    identity = AsyncMock(spec=IdentityProviderClient)
    identity.create_user.return_value = IdentityUser(id="user_new", username="new.user")
    identity.update_user.return_value = IdentityUser(id="user_new")
    identity.delete_user.return_value = None
    return identity


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def person_payload() -> dict[str, Any]:
    """Provide camelCase profile fields as sent by a browser form."""
    return {
        "username": "ann.jones",
        "name": "Ann",
        "surname": "Jones",
        "email": "ann@example.com",
        "phone": "555-0100",
        "address": "1 School Lane",
        "img": "",
        "bloodType": "A+",
        "sex": "female",
        "birthday": "1985-04-12",
    }


@pytest.fixture
def birthday() -> datetime:
    return datetime(1985, 4, 12, tzinfo=timezone.utc)
