"""
Redis client lifecycle.

One client (backed by a connection pool) is created at application
startup and shared by every request.  ``connect_redis`` refuses to hand
out a client that cannot reach the server, so a misconfigured
``REDIS_URL`` stops the service before it accepts requests.
"""

import logging

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from .errors import StorageUnavailable

logger = logging.getLogger(__name__)


def create_redis_client(url: str) -> aioredis.Redis:
    """Build a client for ``url`` that decodes responses to ``str``."""
    return aioredis.from_url(url, encoding="utf-8", decode_responses=True)


async def connect_redis(url: str) -> aioredis.Redis:
    """Create a client for ``url`` and check the server answers ``PING``.

    Raises ``StorageUnavailable`` (after releasing the client) when the
    server cannot be reached.
    """
    client = create_redis_client(url)
    try:
        await client.ping()
    except (RedisError, OSError) as exc:
        await client.aclose()
        raise StorageUnavailable(f"cannot connect to {url}: {exc}") from exc
    logger.info("Redis connected at %s", url)
    return client
