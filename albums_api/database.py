"""
Albums API — Database Engine Management
========================================

What:  Async SQLAlchemy engine, session factory, and declarative base.
How:   create_app() builds ONE engine per process from the settings and keeps
       it on app.state; the AlbumService receives the session factory built
       around it. Nothing here holds a module-level connection.
Who:   Used by main.py (startup/shutdown), the health route, and tests.

Connection Handling:
    The engine's pool is left at driver defaults. Each service operation opens
    a short session, runs a single statement, and commits it.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from albums_api.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Holds the shared metadata used by create_tables().
    """
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the shared async engine for the album store.

    The engine does not connect until the first statement runs, so building
    the app never blocks on the database.
    """
    return create_async_engine(
        settings.database_url,
        # SQL echo only when debugging
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the shared engine.

    expire_on_commit=False keeps ORM attributes readable after commit,
    which the create path relies on to return the assigned id.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables registered on Base.metadata."""
    # Model import registers the table on Base.metadata
    from albums_api.models.album import Album  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close every pooled connection. Called once at shutdown."""
    await engine.dispose()
