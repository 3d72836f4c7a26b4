"""Health check endpoints."""
from fastapi import APIRouter
import logging

import redis.asyncio as aioredis

from ..core.config import settings
from ..core.database import health_check_db

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("")
async def health_check():
    """Liveness only; touches no external service"""
    return {
        "success": True,
        "status": "OK",
        "message": "School admin API is running",
    }


async def _redis_healthy() -> bool:
    client = aioredis.from_url(settings.redis_url, socket_connect_timeout=2)
    try:
        return bool(await client.ping())
    except Exception as e:
        logger.error(f"Redis health check failed: {e}")
        return False
    finally:
        await client.aclose()


@router.get("/full")
async def full_health_check():
    """Database and broker connectivity"""
    components = {
        "database": "healthy" if await health_check_db() else "unhealthy",
        "broker": "healthy" if await _redis_healthy() else "unhealthy",
    }
    overall = "OK" if all(status == "healthy" for status in components.values()) else "DEGRADED"
    return {
        "success": overall == "OK",
        "status": overall,
        "version": settings.app_version,
        "components": components,
    }
