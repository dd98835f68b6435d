from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from typing import Optional, AsyncGenerator
import logging

from blog_api.core.config import settings

logger = logging.getLogger(__name__)


_async_engine: Optional[AsyncEngine] = None
_async_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(database_url: str) -> dict:
    """Pool options for the configured backend; SQLite manages its own pool."""
    if database_url.startswith("sqlite"):
        return {"echo": settings.DATABASE_ECHO}
    return {
        "echo": settings.DATABASE_ECHO,
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_recycle": 900,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
    }


def get_async_engine() -> AsyncEngine:
    """Get or create the async engine (lazy initialization)."""
    global _async_engine
    if _async_engine is None:
        _async_engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
        logger.info("Async engine created")
    return _async_engine


def get_async_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get or create the async session maker bound to the shared engine."""
    global _async_session_maker
    if _async_session_maker is None:
        _async_session_maker = async_sessionmaker(
            bind=get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Async session maker created")
    return _async_session_maker


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one pooled session per request, released afterwards."""
    session_maker = get_async_session_maker()
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables():
    """Create all tables asynchronously."""
    # register the table models on SQLModel.metadata
    from blog_api.db import models  # noqa: F401

    try:
        engine = get_async_engine()
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


async def dispose_engine():
    """Close every pooled connection; called on shutdown."""
    global _async_engine, _async_session_maker
    if _async_engine is not None:
        await _async_engine.dispose()
        logger.info("Async engine disposed")
    _async_engine = None
    _async_session_maker = None
