"""
Top‑level package for the social posts API.

This file makes ``social_posts_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``social_posts_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
