"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
service starts against a local Redis on port 3000 without any
environment at all.
"""

import os
from dataclasses import dataclass


def _as_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Rede Social API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _as_bool(os.getenv("DEBUG", "false"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Connection URL for the key-value backend.  The documented variant
    # of the service used ``redis://127.0.0.1:6379``; both point at the
    # same local instance.
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")

    # ``redis`` for the network backend, ``memory`` to keep posts in
    # process (useful for demos and tests; data is lost on restart).
    store_backend: str = os.getenv("STORE_BACKEND", "redis")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Expose the generated OpenAPI document and the interactive docs
    # at ``/openapi.json`` and ``/docs``.
    enable_docs: bool = _as_bool(os.getenv("ENABLE_DOCS", "true"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
