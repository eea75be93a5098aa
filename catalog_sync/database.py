# catalog_sync/database.py

# type: ignore[misc]
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.orm import declarative_base
from typing import Optional
from catalog_sync.core.config import get_settings
import os

Base = declarative_base()


def resolve_database_url(database_url: Optional[str] = None) -> str:
    """Pick the database URL and switch postgres URLs onto the asyncpg driver."""
    settings = get_settings()

    # Use environment variable directly if settings is empty
    url = database_url or settings.DATABASE_URL or os.environ.get('DATABASE_URL', '')
    if not url:
        raise ValueError("DATABASE_URL is not set in environment variables")

    # Convert postgresql:// to postgresql+asyncpg:// for async support
    if url.startswith('postgresql://'):
        url = url.replace('postgresql://', 'postgresql+asyncpg://', 1)
    return url


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    url = resolve_database_url(database_url)
    if url.startswith('sqlite'):
        # SQLite has no connection pool sizing
        return create_async_engine(url, echo=False)

    settings = get_settings()
    return create_async_engine(
        url,
        echo=False,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_recycle=1800
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables - used for local SQLite databases and tests."""
    from catalog_sync import models  # noqa: F401  (registers models on Base)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

