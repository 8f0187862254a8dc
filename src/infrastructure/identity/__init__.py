# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider integration."""

from src.infrastructure.identity.client import (
    IdentityProviderClient,
    IdentityProviderError,
    IdentityUser,
)

__all__ = [
    "IdentityProviderClient",
    "IdentityProviderError",
    "IdentityUser",
]
