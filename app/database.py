"""
Database configuration and session management.

This module contains the SQLAlchemy engine and session configuration for the
hydrology database. The database is populated offline and only ever read here.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import settings

# Create async engine
engine = create_async_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    echo=False,
    future=True,
)

# Create async session factory
async_session = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Base class for all database models
Base = declarative_base()


_models_configured = False


def _configure_models():
    """Import all models to ensure SQLAlchemy mappers are properly configured."""
    global _models_configured
    if _models_configured:
        return
    import app.models  # noqa: F401
    from sqlalchemy.orm import configure_mappers
    configure_mappers()
    _models_configured = True


async def get_db() -> AsyncSession:
    """
    Dependency function to get database session.

    Yields an async database session and ensures proper cleanup. Nothing is
    committed: every request is a read.
    """
    _configure_models()

    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
