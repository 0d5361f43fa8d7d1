"""
Post persistence on top of a key-value backend.

Posts are kept as a manual secondary index over plain keys:

* ``posts:counter`` – integer sequence used to issue post ids;
* ``posts:ids`` – set of every id ever issued;
* ``post:<id>`` – the post itself, serialized as a flat JSON object
  with the fields ``id, quem, data_hora, comentario, publico``.

The key names and the record format are shared with existing clients
and must not change.

``save`` writes the record before adding the id to the index.  The two
writes are not transactional and nothing is rolled back when the second
one fails; readers that enumerate the index skip ids whose record is
missing.

Two stores implement the same ``PostStore`` contract: ``RedisPostStore``
for production and ``InMemoryPostStore`` for tests and backend-less
runs.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Set

from pydantic import ValidationError as PydanticValidationError
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from social_posts_api.app.core.config import Settings
from social_posts_api.app.core.errors import StorageUnavailable
from social_posts_api.app.core.redis_client import connect_redis
from social_posts_api.app.schemas.post import Post

logger = logging.getLogger(__name__)

POSTS_COUNTER_KEY = "posts:counter"
POST_IDS_KEY = "posts:ids"
POST_KEY_PREFIX = "post:"


def post_key(post_id: str) -> str:
    return f"{POST_KEY_PREFIX}{post_id}"


def decode_post(post_id: str, raw: Optional[str]) -> Optional[Post]:
    """Deserialize a stored record; unreadable records count as missing."""
    if raw is None:
        return None
    try:
        return Post.model_validate_json(raw)
    except PydanticValidationError as exc:
        logger.warning("Ignoring unreadable record %s: %s", post_key(post_id), exc)
        return None


class PostStore(ABC):
    """Contract shared by every post store."""

    @abstractmethod
    async def next_id(self) -> str:
        """Atomically advance the id sequence and return the new value."""

    @abstractmethod
    async def save(self, post: Post) -> None:
        """Store ``post`` under its id and add the id to the index."""

    @abstractmethod
    async def get(self, post_id: str) -> Optional[Post]:
        """Return the post stored under ``post_id`` or ``None``."""

    @abstractmethod
    async def all_ids(self) -> Set[str]:
        """Return the identifier index (order unspecified)."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of ids in the index."""

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


@contextmanager
def _backend_errors() -> Iterator[None]:
    """Translate client exceptions into ``StorageUnavailable``."""
    try:
        yield
    except (RedisError, OSError) as exc:
        raise StorageUnavailable(str(exc) or exc.__class__.__name__) from exc


class RedisPostStore(PostStore):
    """Post store backed by a shared ``redis.asyncio`` client."""

    def __init__(self, client: aioredis.Redis) -> None:
        self.client = client

    async def next_id(self) -> str:
        with _backend_errors():
            value = await self.client.incr(POSTS_COUNTER_KEY)
        return str(value)

    async def save(self, post: Post) -> None:
        with _backend_errors():
            await self.client.set(post_key(post.id), post.model_dump_json())
            await self.client.sadd(POST_IDS_KEY, post.id)

    async def get(self, post_id: str) -> Optional[Post]:
        try:
            with _backend_errors():
                raw = await self.client.get(post_key(post_id))
        except UnicodeDecodeError as exc:
            # Value is not UTF-8 text, so it cannot be a JSON record.
            logger.warning("Ignoring unreadable record %s: %s", post_key(post_id), exc)
            return None
        return decode_post(post_id, raw)

    async def all_ids(self) -> Set[str]:
        with _backend_errors():
            members = await self.client.smembers(POST_IDS_KEY)
        return set(members)

    async def count(self) -> int:
        with _backend_errors():
            return int(await self.client.scard(POST_IDS_KEY))

    async def ping(self) -> bool:
        with _backend_errors():
            return bool(await self.client.ping())

    async def close(self) -> None:
        await self.client.aclose()


class InMemoryPostStore(PostStore):
    """Post store kept in process memory.

    Records are stored serialized, exactly as the Redis store keeps
    them, so both stores go through the same encode/decode path.  None
    of the operations yields to the event loop while touching state,
    which makes each of them atomic for asyncio callers.
    """

    def __init__(self) -> None:
        self.counter = 0
        self.records: Dict[str, str] = {}
        self.ids: Set[str] = set()

    async def next_id(self) -> str:
        self.counter += 1
        return str(self.counter)

    async def save(self, post: Post) -> None:
        self.records[post_key(post.id)] = post.model_dump_json()
        self.ids.add(post.id)

    async def get(self, post_id: str) -> Optional[Post]:
        return decode_post(post_id, self.records.get(post_key(post_id)))

    async def all_ids(self) -> Set[str]:
        return set(self.ids)

    async def count(self) -> int:
        return len(self.ids)


async def open_post_store(settings: Settings) -> PostStore:
    """Create the store selected by ``settings.store_backend``.

    Raises ``StorageUnavailable`` when the Redis backend is unreachable.
    """
    backend = settings.store_backend.lower()
    if backend == "memory":
        logger.warning("Using in-memory post store; posts are lost on restart")
        return InMemoryPostStore()
    if backend != "redis":
        raise ValueError(f"Unknown STORE_BACKEND {settings.store_backend!r}")
    client = await connect_redis(settings.redis_url)
    return RedisPostStore(client)
