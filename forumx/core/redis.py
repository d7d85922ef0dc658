# ruff: noqa: PLW0603
"""Redis connection management.

Provides async Redis client for:
- Report rate limiting
- Pub/Sub for real-time notifications

Redis is optional: every caller checks for ``None`` and skips the feature.
"""

import redis.asyncio as redis

from forumx.config import Settings
from forumx.core.logging import get_logger


logger = get_logger(__name__)

# Global Redis client
_redis_client: redis.Redis | None = None


async def init_redis(settings: Settings) -> redis.Redis:
    """Initialize Redis connection pool."""
    global _redis_client

    _redis_client = redis.from_url(
        settings.redis_url,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
        decode_responses=True,
    )

    # Test connection
    try:
        await _redis_client.ping()
        logger.info("redis_connected", url=settings.redis_url)
    except redis.ConnectionError as e:
        logger.warning("redis_connection_failed", error=str(e))
        _redis_client = None
        raise

    return _redis_client


async def shutdown_redis() -> None:
    """Close Redis connection."""
    global _redis_client

    if _redis_client:
        await _redis_client.aclose()
        logger.info("redis_disconnected")
        _redis_client = None


def get_redis() -> redis.Redis | None:
    """Get Redis client instance."""
    return _redis_client


# Key and channel patterns
def notification_channel(user_email: str) -> str:
    """Get user-specific notification channel name."""
    return f"notifications:user:{user_email}"


def report_rate_key(reporter_email: str) -> str:
    """Get the hourly report counter key for a reporter."""
    return f"reports:rate:{reporter_email}"


def report_claim_key(report_id: str) -> str:
    """Get the key marking a report as already counted against a rate limit."""
    return f"reports:counted:{report_id}"
