# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School database session management.

One async engine per process, created at startup and disposed at shutdown.
Mutation handlers borrow a session per form submission:

    await init_database(settings)
    async with get_session() as session:
        result = await MutationService(session, identity, caller).create_subject(None, payload)
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

if TYPE_CHECKING:
    from src.core.config.settings import Settings

_engine: Optional[AsyncEngine] = None
_sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None


class DatabaseError(Exception):
    """Raised when a session cannot be provided or its work fails.

    Attributes:
        message: Message reported to the form.
        original_error: The underlying SQLAlchemy error, if any.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


async def init_database(settings: "Settings") -> None:
    """Create the engine and session factory from ``settings.database``."""
    global _engine, _sessionmaker

    _engine = create_async_engine(
        settings.database.url,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )
    _sessionmaker = async_sessionmaker(bind=_engine, expire_on_commit=False, autoflush=False)


async def close_database() -> None:
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessionmaker = None


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session; pending work is rolled back if the block raises.

    Raises:
        DatabaseError: If init_database() has not run, or a database
            operation inside the block fails.
    """
    if _sessionmaker is None:
        raise DatabaseError("Database not initialized. Call init_database() first.")

    async with _sessionmaker() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError("Database operation failed", e) from e
        except Exception:
            await session.rollback()
            raise
