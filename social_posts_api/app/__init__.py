"""
Application package initializer.

The service is split into a handful of small pieces: ``core`` holds
configuration, logging, error types and the backend client lifecycle;
``schemas`` holds the pydantic payloads; ``services`` holds the post
store and the query layer built on top of it; ``api`` maps HTTP routes
onto the services.
"""

from .main import app  # noqa: F401
