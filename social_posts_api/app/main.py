"""
Main entrypoint for the social posts API.

This module assembles the FastAPI application: it sets up logging,
opens the post store for the lifetime of the app, registers the error
handlers that turn failures into JSON bodies and includes the routers.
The app is instantiated at import time as ``app``, e.g.::

    uvicorn social_posts_api.app.main:app --port 3000

Error bodies are returned with HTTP 200, as existing clients expect
them; they are recognised by their ``error`` key.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router
from .core.config import settings
from .core.errors import NotFound, PostsAPIError, StorageUnavailable, ValidationError
from .core.logging_config import setup_logging
from .services.post_store import PostStore, open_post_store

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Render service errors as ``{"error": ..., ...}`` bodies."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected payload on %s: %s", request.url.path, exc.errors())
        return JSONResponse(ValidationError().to_body())

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
        return JSONResponse(exc.to_body())

    @app.exception_handler(StorageUnavailable)
    async def storage_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
        logger.error("%s on %s %s: %s", exc.error, request.method, request.url.path, exc)
        return JSONResponse(exc.to_body())

    @app.exception_handler(PostsAPIError)
    async def api_error_handler(request: Request, exc: PostsAPIError) -> JSONResponse:
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(exc.to_body())


def create_app(post_store: Optional[PostStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    post_store : Optional[PostStore]
        Store to serve posts from.  When omitted, the store selected by
        the settings is opened at startup; failing to reach the backend
        aborts startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = post_store
        if store is None:
            try:
                store = await open_post_store(settings)
            except StorageUnavailable as exc:
                logger.critical("Key-value backend unavailable, refusing to start: %s", exc)
                raise
        app.state.post_store = store
        try:
            yield
        finally:
            await store.close()
            logger.info("Post store closed")

    docs = {} if settings.enable_docs else {"docs_url": None, "redoc_url": None, "openapi_url": None}
    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
        **docs,
    )
    register_exception_handlers(app)
    app.include_router(router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
