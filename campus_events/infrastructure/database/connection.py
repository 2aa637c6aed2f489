# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy async.

The Database object is the store handle threaded through the application:
it owns the engine and the sessionmaker and is created once at startup,
then passed explicitly to whoever needs sessions.

Uses SQLAlchemy 2.0 async API with the asyncpg driver for PostgreSQL and
aiosqlite for SQLite.

Example:
    from campus_events.infrastructure.database.connection import Database

    database = Database.from_settings(settings)
    await database.create_schema()

    async with database.session() as session:
        result = await session.execute(select(Event))
        events = result.scalars().all()

    await database.dispose()
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from campus_events.infrastructure.database.models import Base

if TYPE_CHECKING:
    from campus_events.core.config.settings import Settings


class DatabaseError(Exception):
    """Base exception for database lifecycle operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the database error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """Turn on foreign key enforcement for every new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, pool_size: int = 10, max_overflow: int = 20, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given URL.

    Pool sizing only applies to server databases. SQLite connections get
    foreign key enforcement switched on, since SQLite leaves it off.

    Args:
        url: Async SQLAlchemy connection URL.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
        echo: Log SQL statements.

    Returns:
        Configured AsyncEngine.
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=1800,
        echo=echo,
    )


class Database:
    """Handle on the relational store.

    Attributes:
        engine: The SQLAlchemy async engine.
        sessionmaker: Factory for AsyncSession objects bound to the engine.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize the database handle.

        Args:
            engine: Async engine to bind sessions to.
        """
        self.engine = engine
        self.sessionmaker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Database":
        """Create a database handle from application settings.

        Args:
            settings: Application settings containing database configuration.

        Returns:
            Database handle.

        Raises:
            DatabaseError: If engine creation fails.
        """
        try:
            engine = build_engine(
                settings.database.url,
                pool_size=settings.database.pool_size,
                max_overflow=settings.database.max_overflow,
                echo=settings.database.echo,
            )
        except (SQLAlchemyError, ImportError) as e:
            raise DatabaseError("Failed to initialize database connection", e) from e
        return cls(engine)

    @property
    def dialect(self) -> str:
        """Name of the connected SQL dialect."""
        return self.engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Get an async session.

        The session is committed on success and rolled back on exception.
        Domain services commit their own unit of work; the final commit
        here is a no-op for them.

        Yields:
            AsyncSession for database operations.

        Raises:
            DatabaseError: If a database operation fails outside a service.
        """
        async with self.sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError("Database operation failed", e) from e
            except Exception:
                await session.rollback()
                raise

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet.

        Raises:
            DatabaseError: If table creation fails.
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to create database schema", e) from e

    async def check_connection(self) -> bool:
        """Check if the database is reachable.

        Returns:
            True if the database is reachable, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    async def dispose(self) -> None:
        """Close all connections in the pool."""
        await self.engine.dispose()
