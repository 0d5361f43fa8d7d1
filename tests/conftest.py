import asyncio

import fakeredis
import pytest
from fastapi.testclient import TestClient

from social_posts_api.app.main import create_app
from social_posts_api.app.schemas.post import Post
from social_posts_api.app.services.post_store import InMemoryPostStore, RedisPostStore


def run(coro):
    return asyncio.run(coro)


def make_post(post_id, comentario="hello", data_hora="2024-05-01T10:00:00.000Z", quem="Ana", publico=True):
    return Post(id=str(post_id), quem=quem, data_hora=data_hora, comentario=comentario, publico=publico)


def redis_store():
    """Redis store on a private fake server (one per test)."""
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    return RedisPostStore(client)


@pytest.fixture(params=["memory", "redis"])
def store_factory(request):
    """Build a fresh store inside the running event loop.

    Redis clients bind to the loop they are first used in, so stores are
    created inside each ``asyncio.run`` scenario rather than up front.
    """
    if request.param == "memory":
        return InMemoryPostStore
    return redis_store


@pytest.fixture
def memory_store():
    return InMemoryPostStore()


@pytest.fixture
def client(memory_store):
    """HTTP client over an app serving the in-memory store."""
    with TestClient(create_app(memory_store)) as c:
        yield c
