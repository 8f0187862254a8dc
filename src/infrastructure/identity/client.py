# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider API client.

Async HTTP client for the identity provider's backend user API. The
provider is the system of record for accounts, credentials and role
metadata; teacher, student and parent rows reuse its user ids.

The wire format follows Clerk's backend API:
- POST   /users        create an account, returns the user object
- PATCH  /users/{id}   update an account
- DELETE /users/{id}   delete an account

Example:
    >>> async with IdentityProviderClient.from_settings(settings.identity) as identity:
    ...     user = await identity.create_user(
    ...         username="mrs.jones",
    ...         password="s3cret-pass",
    ...         first_name="Ann",
    ...         last_name="Jones",
    ...     )
    ...     print(user.id)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from src.core.config.settings import IdentityProviderSettings

logger = logging.getLogger(__name__)


class IdentityUser(BaseModel):
    """User account as returned by the identity provider."""

    model_config = ConfigDict(extra="ignore")

    id: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    public_metadata: dict[str, Any] = {}


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects a call or is unreachable.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status returned by the provider, if any.
        response_body: Raw response body, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body


class IdentityProviderClient:
    """Async client for identity provider user management.

    Attributes:
        _client: Underlying httpx client bound to the provider's base URL.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the client.

        Args:
            client: Configured httpx client (base URL and auth headers set).
        """
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: IdentityProviderSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> IdentityProviderClient:
        """Build a client from identity provider settings.

        Args:
            settings: Identity provider configuration.
            transport: Optional transport override (used by tests).

        Returns:
            Configured client.
        """
        return cls(
            httpx.AsyncClient(
                base_url=settings.api_url,
                headers=settings.auth_headers,
                timeout=settings.timeout,
                transport=transport,
            )
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> IdentityProviderClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def create_user(
        self,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        public_metadata: dict[str, Any] | None = None,
    ) -> IdentityUser:
        """Create a user account.

        Args:
            username: Login name.
            password: Initial password.
            first_name: Given name.
            last_name: Family name.
            public_metadata: Optional metadata visible in session claims
                (e.g. ``{"role": "parent"}``).

        Returns:
            The created account, including its newly generated id.

        Raises:
            IdentityProviderError: If the provider rejects the request.
        """
        payload: dict[str, Any] = {
            "username": username,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
        }
        if public_metadata:
            payload["public_metadata"] = public_metadata

        data = await self._request("POST", "/users", json=payload)
        user = IdentityUser.model_validate(data)
        logger.info("Created identity account: id=%s, username=%s", user.id, username)
        return user

    async def update_user(
        self,
        user_id: str,
        username: str | None = None,
        password: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> IdentityUser:
        """Update a user account.

        Only the fields that are not None are sent.

        Args:
            user_id: Account identifier.
            username: New login name.
            password: New password.
            first_name: New given name.
            last_name: New family name.

        Returns:
            The updated account.

        Raises:
            IdentityProviderError: If the provider rejects the request.
        """
        fields = {
            "username": username,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
        }
        payload = {key: value for key, value in fields.items() if value is not None}

        data = await self._request("PATCH", f"/users/{user_id}", json=payload)
        logger.info("Updated identity account: id=%s", user_id)
        return IdentityUser.model_validate(data)

    async def delete_user(self, user_id: str) -> None:
        """Delete a user account.

        Args:
            user_id: Account identifier.

        Raises:
            IdentityProviderError: If the provider rejects the request.
        """
        await self._request("DELETE", f"/users/{user_id}")
        logger.info("Deleted identity account: id=%s", user_id)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(
                "Identity provider rejected %s %s: status=%s, message=%s",
                method,
                path,
                e.response.status_code,
                message,
            )
            raise IdentityProviderError(
                message,
                status_code=e.response.status_code,
                response_body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            logger.error("Identity provider connection error: %s", str(e))
            raise IdentityProviderError(
                f"Failed to reach identity provider: {str(e)}"
            ) from e

        if not response.content:
            return {}
        return response.json()


def _error_message(response: httpx.Response) -> str:
    """Extract the most specific error message from a provider response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    errors = body.get("errors") if isinstance(body, dict) else None
    if errors:
        first = errors[0]
        return first.get("long_message") or first.get("message") or str(first)
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
