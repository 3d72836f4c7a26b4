# school_admin/core/database.py
"""Database connection and session management using SQLAlchemy."""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy import text
import logging

from .config import settings

logger = logging.getLogger(__name__)


def _make_engine(url: str, application_name: str, pool_size: int, max_overflow: int, echo: bool = False):
    """Build an async engine, with pool tuning only where the driver supports it"""
    if url.startswith("sqlite"):
        # An in-memory database only exists on one connection; a file gets a fresh one per session
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool if ":memory:" in url else NullPool,
            connect_args={"check_same_thread": False},
        )

    connect_args = {}
    if "asyncpg" in url:
        connect_args = {
            "command_timeout": 60,
            "server_settings": {
                "jit": "off",
                "application_name": application_name,
                "idle_in_transaction_session_timeout": "60s",
            },
        }

    return create_async_engine(
        url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=echo,
        connect_args=connect_args,
    )


engine = _make_engine(
    settings.database_url,
    application_name="school_admin_api",
    pool_size=10,
    max_overflow=20,
    echo=(settings.environment == 'development' and settings.log_level.lower() == 'debug'),
)

# Separate engine for notification writes so they never compete with request sessions
background_engine = _make_engine(
    settings.database_url,
    application_name="school_admin_background",
    pool_size=4,
    max_overflow=4,
)

# Regular session factory for API requests
AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)

# Background task session factory with separate engine
AsyncBackgroundSessionLocal = async_sessionmaker(
    background_engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for API requests with proper error handling"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise

async def health_check_db() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False

async def close_db_connections():
    """Properly close all database connections"""
    await engine.dispose()
    if background_engine is not engine:
        await background_engine.dispose()
    logger.info("Database connections closed")
