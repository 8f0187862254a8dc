# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Caller session context.

Session tokens are issued by the identity provider. The caller's user id
is the ``sub`` claim and the role lives in the public metadata claim
(``{"metadata": {"role": "teacher"}}``), with a top-level ``role`` claim
accepted as a fallback.

Example:
    >>> verifier = SessionTokenVerifier(get_settings().session)
    >>> session = verifier.verify(bearer_token)
    >>> session.is_teacher
    True
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, jwt
from jose.exceptions import JOSEError

from src.core.config.settings import SessionSettings

logger = logging.getLogger(__name__)

TEACHER_ROLE = "teacher"


class SessionError(Exception):
    """Base exception for session token errors."""

    pass


class TokenExpiredError(SessionError):
    """Raised when a session token has expired."""

    pass


class InvalidTokenError(SessionError):
    """Raised when a session token is malformed or badly signed."""

    pass


class SessionContext:
    """Authenticated caller.

    Attributes:
        user_id: Identity provider user id of the caller.
        role: Role claim (admin, teacher, student, parent), if any.
    """

    def __init__(self, user_id: str | None, role: str | None = None) -> None:
        self.user_id = user_id
        self.role = role

    @property
    def is_teacher(self) -> bool:
        """Check if the caller acts with the teacher role."""
        return self.role == TEACHER_ROLE

    @classmethod
    def anonymous(cls) -> "SessionContext":
        """Context for calls made without a signed-in user."""
        return cls(user_id=None, role=None)

    def __repr__(self) -> str:
        return f"SessionContext(user_id={self.user_id!r}, role={self.role!r})"


class SessionTokenVerifier:
    """Verifies session tokens and extracts the caller context.

    Attributes:
        _settings: Session token configuration.
    """

    def __init__(self, settings: SessionSettings) -> None:
        self._settings = settings

    def verify(self, token: str) -> SessionContext:
        """Decode and validate a session token.

        Args:
            token: JWT string, with or without a ``Bearer`` prefix.

        Returns:
            SessionContext for the caller.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        if token.lower().startswith("bearer "):
            token = token[7:]

        options = {"verify_iss": self._settings.issuer is not None}
        try:
            claims = jwt.decode(
                token,
                self._settings.verification_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
                issuer=self._settings.issuer,
                options=options,
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Session token has expired")
        except JOSEError as e:
            logger.warning("Session token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid session token: {str(e)}")

        user_id = claims.get("sub")
        if not user_id:
            raise InvalidTokenError("Session token has no subject")

        return SessionContext(user_id=user_id, role=self._role_from_claims(claims))

    def issue(self, user_id: str, role: str | None = None, expires_in_minutes: int = 60) -> str:
        """Sign a session token with the configured key.

        Only usable with symmetric algorithms; intended for local
        development and tests where no identity provider issues tokens.

        Args:
            user_id: Caller user id.
            role: Role to place in the metadata claim.
            expires_in_minutes: Token lifetime.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(timezone.utc)
        claims: dict[str, Any] = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=expires_in_minutes)).timestamp()),
            "metadata": {self._settings.role_claim: role} if role else {},
        }
        if self._settings.issuer:
            claims["iss"] = self._settings.issuer
        return jwt.encode(
            claims,
            self._settings.verification_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def _role_from_claims(self, claims: dict[str, Any]) -> str | None:
        metadata = claims.get("metadata") or {}
        if isinstance(metadata, dict) and metadata.get(self._settings.role_claim):
            return str(metadata[self._settings.role_claim])
        role = claims.get(self._settings.role_claim)
        return str(role) if role else None
