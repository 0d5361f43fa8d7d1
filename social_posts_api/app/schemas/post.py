"""
Pydantic schemas for posts.

Field names follow the wire format shared with existing clients:
``quem`` (author), ``data_hora`` (creation timestamp), ``comentario``
(text) and ``publico`` (visibility).  The same ``Post`` model is used
for the JSON record stored in the backend and for API responses.
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field, StrictBool, StrictStr, field_validator


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime (UTC if naive)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PostCreate(BaseModel):
    """Schema for creating a new post.

    Types are strict: ``publico`` must be a JSON boolean and the text
    fields must be non-empty JSON strings; no coercion is attempted.
    """

    quem: StrictStr = Field(..., min_length=1, description="Author of the post")
    comentario: StrictStr = Field(..., min_length=1, description="Text of the post")
    publico: StrictBool = Field(..., description="Whether the post is public")


class Post(BaseModel):
    """Schema for a stored post.

    Ids are the decimal strings issued by the counter; a record carrying
    any other id fails validation and is treated as unreadable.
    """

    id: str = Field(..., pattern=r"^[0-9]+$")
    quem: str
    data_hora: str
    comentario: str
    publico: bool

    @field_validator("data_hora")
    @classmethod
    def validate_data_hora(cls, v: str) -> str:
        parse_timestamp(v)
        return v

    @property
    def created_at(self) -> datetime:
        return parse_timestamp(self.data_hora)


class PostCreated(BaseModel):
    success: bool = True
    post: Post


class PostDetail(BaseModel):
    post: Post


class PostList(BaseModel):
    posts: List[Post]
    count: int


class PostSearch(PostList):
    expression: str


class PostCount(BaseModel):
    count: int
