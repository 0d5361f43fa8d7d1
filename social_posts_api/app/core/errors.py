"""
Error taxonomy for the posts service.

Every error carries enough context to be rendered as the JSON body the
clients expect (``error`` plus either ``message`` or ``id``).  The
handlers that do the rendering live in ``main``.
"""

from typing import Any, Dict, Optional


class PostsAPIError(Exception):
    """Base class for all errors raised by the service."""

    error: str = "Erro interno"

    def __init__(self, message: str = "", error: Optional[str] = None) -> None:
        super().__init__(message)
        if error is not None:
            self.error = error

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.error, "message": str(self)}


class ValidationError(PostsAPIError):
    """Creation payload is missing a field or carries the wrong type."""

    error = "Dados inválidos"
    default_message = (
        "É necessário fornecer: quem (string), comentario (string), publico (boolean)"
    )

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class NotFound(PostsAPIError):
    """No record is stored for the requested post id."""

    error = "Post não encontrado"

    def __init__(self, post_id: str) -> None:
        super().__init__(f"post {post_id} not found")
        self.post_id = post_id

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.error, "id": self.post_id}


class StorageUnavailable(PostsAPIError):
    """The key-value backend is unreachable or rejected an operation.

    ``error`` is filled in at the request boundary with text describing
    the operation that failed (e.g. ``Erro ao criar post``).
    """

    error = "Erro de armazenamento"
