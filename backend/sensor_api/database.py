import logging

import asyncpg

from sensor_api.config import Settings

logger = logging.getLogger(__name__)


def _get_raw_pg_url(settings: Settings) -> str:
    """Convert SQLAlchemy-style URL to plain postgres:// for asyncpg."""
    # asyncpg needs postgresql:// not postgresql+asyncpg://
    return settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")


async def create_pool(settings: Settings) -> asyncpg.Pool:
    """Create the asyncpg connection pool shared by all repositories.

    The pool is handed down explicitly to the service factory; whoever
    creates it is responsible for calling close_pool().
    """
    pool = await asyncpg.create_pool(
        _get_raw_pg_url(settings),
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=settings.DB_COMMAND_TIMEOUT,
    )
    logger.info(
        "Database pool ready (min=%d, max=%d)",
        settings.DB_POOL_MIN_SIZE,
        settings.DB_POOL_MAX_SIZE,
    )
    return pool


async def close_pool(pool: asyncpg.Pool) -> None:
    """Close the asyncpg pool (call on app shutdown)."""
    await pool.close()
    logger.info("Database pool closed")
