# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Caller authentication context.

Exports:
    SessionContext: Caller id and role claim.
    SessionTokenVerifier: Session token validation.
"""

from src.domains.auth.session import (
    InvalidTokenError,
    SessionContext,
    SessionError,
    SessionTokenVerifier,
    TokenExpiredError,
)

__all__ = [
    "InvalidTokenError",
    "SessionContext",
    "SessionError",
    "SessionTokenVerifier",
    "TokenExpiredError",
]
