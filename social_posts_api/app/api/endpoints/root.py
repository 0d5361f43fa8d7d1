"""
Landing and health endpoints.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from social_posts_api.app.api.deps import get_post_store
from social_posts_api.app.core.errors import StorageUnavailable
from social_posts_api.app.services.post_store import PostStore

logger = logging.getLogger(__name__)

router = APIRouter()

LANDING_TEXT = "Rede Social API - Posts"


@router.get("/", response_class=PlainTextResponse, summary="Landing text")
async def landing() -> str:
    return LANDING_TEXT


@router.get("/health", response_model=Dict[str, Any], summary="Backend health")
async def health(store: PostStore = Depends(get_post_store)) -> Dict[str, Any]:
    """Report whether the key-value backend answers."""
    try:
        await store.ping()
    except StorageUnavailable as exc:
        logger.error("Health check failed: %s", exc)
        return {"status": "error", "backend": "unavailable", "message": str(exc)}
    return {"status": "ok", "backend": "ok"}
