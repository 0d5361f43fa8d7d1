"""
Top‑level router.

The service exposes its routes at the root of the URL space, so the
endpoint routers are included without a prefix.
"""

from fastapi import APIRouter

from .endpoints import posts, root

router = APIRouter()

router.include_router(root.router, tags=["root"])
router.include_router(posts.router, prefix="/post", tags=["posts"])
