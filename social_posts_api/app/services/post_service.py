"""
Query layer for posts.

``PostService`` holds no state of its own; every call goes to the
store it was built with.  Listing resolves the identifier index one id
at a time and silently drops ids whose record is missing.
"""

from __future__ import annotations

import logging
import re
from typing import List

from social_posts_api.app.core.errors import NotFound
from social_posts_api.app.schemas.post import Post, PostCreate, utc_timestamp
from social_posts_api.app.services.post_store import PostStore

logger = logging.getLogger(__name__)

# ASCII digits only; anything else on ``/post/{param}`` is a search.
POST_ID_PATTERN = re.compile(r"[0-9]+")


def is_post_id(param: str) -> bool:
    """Return ``True`` when ``param`` should be looked up as a post id."""
    return POST_ID_PATTERN.fullmatch(param) is not None


def newest_first(posts: List[Post]) -> List[Post]:
    """Sort by creation time descending.

    Posts created within the same millisecond share a timestamp; ids are
    issued in creation order, so the higher id comes first.
    """
    return sorted(posts, key=lambda post: (post.created_at, int(post.id)), reverse=True)


class PostService:
    """Create, fetch, list and search posts kept in a ``PostStore``."""

    def __init__(self, store: PostStore) -> None:
        self.store = store

    async def create(self, data: PostCreate) -> Post:
        post_id = await self.store.next_id()
        post = Post(
            id=post_id,
            quem=data.quem,
            data_hora=utc_timestamp(),
            comentario=data.comentario,
            publico=data.publico,
        )
        await self.store.save(post)
        logger.info("Created post %s by %s", post.id, post.quem)
        return post

    async def get(self, post_id: str) -> Post:
        """Return the post stored under ``post_id``; raise ``NotFound`` otherwise."""
        post = await self.store.get(post_id)
        if post is None:
            raise NotFound(post_id)
        return post

    async def list_all(self) -> List[Post]:
        posts: List[Post] = []
        for post_id in await self.store.all_ids():
            post = await self.store.get(post_id)
            if post is None:
                logger.debug("Index entry %s has no record, skipping", post_id)
                continue
            posts.append(post)
        return newest_first(posts)

    async def search(self, expression: str) -> List[Post]:
        """Posts whose ``comentario`` contains ``expression``, ignoring case.

        An empty expression matches every post.
        """
        needle = expression.casefold()
        return [
            post for post in await self.list_all() if needle in post.comentario.casefold()
        ]

    async def count(self) -> int:
        return await self.store.count()
