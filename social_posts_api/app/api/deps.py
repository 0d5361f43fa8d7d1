"""
FastAPI dependencies.

The post store is created by the application lifespan and kept on
``app.state``; handlers receive it (or a service wrapping it) through
these dependencies instead of importing a module-level client.
"""

from fastapi import Request

from social_posts_api.app.services.post_service import PostService
from social_posts_api.app.services.post_store import PostStore


def get_post_store(request: Request) -> PostStore:
    return request.app.state.post_store


def get_post_service(request: Request) -> PostService:
    return PostService(get_post_store(request))
