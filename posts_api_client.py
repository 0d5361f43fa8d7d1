"""Social posts API client.

A thin wrapper around the posts REST API using the ``requests``
library.  Every method returns a tuple ``(data, error)``: on success
``error`` is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with keys ``status_code`` and ``message``.

The server reports failures inside HTTP 200 bodies carrying an
``error`` key; the client treats those bodies as errors as well, so
callers only ever have to look at ``error``.

* :meth:`create_post` – publish a post.
* :meth:`list_posts` – every post, newest first.
* :meth:`count_posts` – number of posts.
* :meth:`get_post` – a single post by id.
* :meth:`search_posts` – posts whose text contains an expression.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class PostsAPI:
    """Client for the social posts API."""

    def __init__(
        self,
        *,
        base_url: str = "http://localhost:3000",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            timeout: Timeout in seconds applied to every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path relative to :attr:`base_url` (e.g. ``/post``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = exc.response.text if exc.response is not None else ""
            logger.error("API request failed (%s): %s", status, message or exc)
            return None, {"status_code": status, "message": message or str(exc)}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if response.headers.get("content-type", "").startswith("application/json"):
            data = response.json()
        else:
            data = response.text
        if isinstance(data, dict) and "error" in data:
            message = data.get("message") or data["error"]
            logger.warning("API returned error for %s %s: %s", method, path, message)
            return None, {"status_code": response.status_code, "message": message, "body": data}
        return data, None

    # ------------------------------------------------------------------
    # Post operations
    # ------------------------------------------------------------------
    def create_post(
        self, quem: str, comentario: str, publico: bool
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Publish a post and return it as stored by the server."""
        data, error = self._request(
            "POST",
            "/post",
            json_body={"quem": quem, "comentario": comentario, "publico": publico},
        )
        if error:
            return None, error
        return data.get("post"), None

    def list_posts(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/post")
        if error:
            return [], error
        return data.get("posts", []), None

    def count_posts(self) -> Tuple[Optional[int], Optional[Error]]:
        data, error = self._request("GET", "/post/count")
        if error:
            return None, error
        return data.get("count"), None

    def get_post(self, post_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single post by id.

        Ids are numeric; anything else would be treated by the server as
        a search expression, so it is rejected here.
        """
        post_id = str(post_id)
        if not post_id.isdigit():
            return None, {"status_code": None, "message": f"Invalid post id {post_id!r}"}
        data, error = self._request("GET", f"/post/{post_id}")
        if error:
            return None, error
        return data.get("post"), None

    def search_posts(self, expression: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Posts whose comment contains ``expression`` (case-insensitive).

        An all-digit expression would be served as an id lookup by the
        server, so it is rejected here.
        """
        if not expression or expression.isdigit():
            return [], {"status_code": None, "message": f"Invalid search expression {expression!r}"}
        data, error = self._request("GET", f"/post/{quote(expression, safe='')}")
        if error:
            return [], error
        return data.get("posts", []), None
