# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base exceptions shared by the domain services.

Each service module subclasses these for its own failure cases; the
mutation facade maps them onto ErrorKind through the ``kind`` attribute.
"""

from src.models.common import ErrorKind


class MutationError(Exception):
    """Base exception for domain service errors."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class PreconditionError(MutationError):
    """Raised when a business rule rejects the request before any write."""

    kind = ErrorKind.PRECONDITION


class MissingIdError(PreconditionError):
    """Raised when an update or delete arrives without an identifier."""

    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} id is required")


class NotFoundError(MutationError):
    """Raised when a referenced row does not exist."""

    kind = ErrorKind.NOT_FOUND


class AuthorizationError(MutationError):
    """Raised when the caller may not perform the mutation."""

    kind = ErrorKind.AUTHORIZATION


class InvalidPayloadError(MutationError):
    """Raised when a payload fails validation."""

    kind = ErrorKind.VALIDATION
