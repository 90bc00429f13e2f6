"""Database session configuration with async SQLAlchemy."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from loanapp.config import settings
from loanapp.db.base import Base

# Convert postgresql:// to postgresql+asyncpg://
database_url = settings.DATABASE_URL
if database_url.startswith("postgresql://"):
    database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)


def _get_engine_kwargs() -> dict:
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs = {
        "echo": settings.ENVIRONMENT == "development",
        "future": True,
        "pool_pre_ping": True,
    }
    if settings.ENVIRONMENT == "test":
        kwargs["poolclass"] = NullPool
    if settings.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


# Create async engine with connection pooling
engine = create_async_engine(database_url, **_get_engine_kwargs())

# Create session factory
SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async with SessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Create all tables that do not exist yet."""
    # Register the mapped classes on Base.metadata
    import loanapp.models.domain  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
