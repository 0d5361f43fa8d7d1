"""Entry point for the social posts API.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``); the Redis URL from ``REDIS_URL``.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from social_posts_api.app.core.config import settings


async def run_api() -> bool:
    """Serve the API until interrupted.

    Returns ``False`` when the application failed to start, e.g. because
    Redis could not be reached.
    """
    config = Config(
        app="social_posts_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()
    return server.started


def main() -> None:
    try:
        started = asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        return
    if not started:
        logging.getLogger(__name__).critical("Social posts API failed to start")
        sys.exit(3)


if __name__ == "__main__":
    main()
