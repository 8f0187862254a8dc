# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package.

Pydantic-based settings loaded from environment variables.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.mutation.exam_delete_requires_owner
    False
"""

from src.core.config.settings import (
    DatabaseSettings,
    IdentityProviderSettings,
    MutationPolicySettings,
    SessionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "IdentityProviderSettings",
    "SessionSettings",
    "MutationPolicySettings",
]
