"""
Post endpoints.

Every route answers with a JSON body.  Failures are raised as
``PostsAPIError`` subclasses and rendered by the handlers registered in
``main``; storage failures, and any other unexpected exception, are
tagged here with the name of the operation that failed.

``GET /post/{param}`` serves two operations: a param made only of
digits is an id lookup, anything else is a case-insensitive search on
``comentario``.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Union

from fastapi import APIRouter, Depends

from social_posts_api.app.api.deps import get_post_service
from social_posts_api.app.core.errors import PostsAPIError, StorageUnavailable
from social_posts_api.app.schemas.post import (
    PostCount,
    PostCreate,
    PostCreated,
    PostDetail,
    PostList,
    PostSearch,
)
from social_posts_api.app.services.post_service import PostService, is_post_id

logger = logging.getLogger(__name__)

router = APIRouter()


@contextmanager
def operation_errors(error: str) -> Iterator[None]:
    try:
        yield
    except StorageUnavailable as exc:
        exc.error = error
        raise
    except PostsAPIError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure: %s", error)
        raise PostsAPIError(str(exc) or exc.__class__.__name__, error=error) from exc


@router.post("", response_model=PostCreated, summary="Create a post")
async def create_post(
    post_in: PostCreate,
    service: PostService = Depends(get_post_service),
) -> PostCreated:
    """Create a post stamped with the server's current UTC time.

    ``quem`` and ``comentario`` must be non-empty strings and ``publico``
    a boolean; otherwise a validation error body is returned and nothing
    is stored.
    """
    with operation_errors("Erro ao criar post"):
        post = await service.create(post_in)
    return PostCreated(success=True, post=post)


@router.get("/count", response_model=PostCount, summary="Count posts")
async def count_posts(service: PostService = Depends(get_post_service)) -> PostCount:
    with operation_errors("Erro ao contar posts"):
        count = await service.count()
    return PostCount(count=count)


@router.get("", response_model=PostList, summary="List all posts, newest first")
async def list_posts(service: PostService = Depends(get_post_service)) -> PostList:
    with operation_errors("Erro ao buscar posts"):
        posts = await service.list_all()
    return PostList(posts=posts, count=len(posts))


@router.get(
    "/{param}",
    response_model=Union[PostDetail, PostSearch],
    summary="Get a post by id or search posts by expression",
)
async def get_or_search_posts(
    param: str,
    service: PostService = Depends(get_post_service),
) -> Union[PostDetail, PostSearch]:
    """Return post ``param`` if it is all digits, else search for it.

    A missing id yields ``{"error": "Post não encontrado", "id": param}``.
    """
    with operation_errors("Erro ao buscar post"):
        if is_post_id(param):
            return PostDetail(post=await service.get(param))
        posts = await service.search(param)
    return PostSearch(posts=posts, count=len(posts), expression=param)
