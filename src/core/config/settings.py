# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the
mutation service. Settings are loaded from environment variables with
sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """School database configuration.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "schooldesk"
    password: SecretStr = SecretStr("schooldesk_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "schooldesk"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"


class IdentityProviderSettings(BaseSettings):
    """Identity provider (user account service) configuration.

    Attributes:
        api_url: Base URL of the identity provider's backend API.
        secret_key: Backend secret key sent as a bearer token.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDENTITY_",
        extra="ignore",
    )

    api_url: str = "https://api.clerk.com/v1"
    secret_key: SecretStr = SecretStr("")
    timeout: float = 15.0

    @property
    def auth_headers(self) -> dict[str, str]:
        """Build authentication headers for API requests."""
        return {
            "Authorization": f"Bearer {self.secret_key.get_secret_value()}",
            "Accept": "application/json",
        }


class SessionSettings(BaseSettings):
    """Session token verification configuration.

    Attributes:
        verification_key: HMAC secret or PEM public key for token signatures.
        algorithm: JWT signing algorithm.
        issuer: Expected token issuer, checked when set.
        role_claim: Name of the metadata claim holding the caller's role.
    """

    model_config = SettingsConfigDict(
        env_prefix="SESSION_",
        extra="ignore",
    )

    verification_key: SecretStr = SecretStr("change-this-in-production")
    algorithm: str = "HS256"
    issuer: str | None = None
    role_claim: str = "role"


class MutationPolicySettings(BaseSettings):
    """Policy switches for the mutation handlers.

    Attributes:
        exam_delete_requires_owner: Restrict exam deletion by teachers to
            exams on lessons they own. Off keeps deletion unrestricted.
        compensate_identity: Delete a freshly created identity account when
            the matching database write fails.
    """

    model_config = SettingsConfigDict(
        env_prefix="MUTATION_",
        extra="ignore",
    )

    exam_delete_requires_owner: bool = False
    compensate_identity: bool = True


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        database: School database settings.
        identity: Identity provider settings.
        session: Session token settings.
        mutation: Mutation policy settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    identity: IdentityProviderSettings = Field(default_factory=IdentityProviderSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    mutation: MutationPolicySettings = Field(default_factory=MutationPolicySettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            if self.session.verification_key.get_secret_value() == "change-this-in-production":
                raise ValueError(
                    "Session verification key must be changed from default in production. "
                    "Set SESSION_VERIFICATION_KEY environment variable."
                )
            if not self.identity.secret_key.get_secret_value():
                raise ValueError(
                    "Identity provider secret key is required in production. "
                    "Set IDENTITY_SECRET_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
