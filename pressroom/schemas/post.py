"""Post Schemas — write requests and the read models cached by the data cache.

Invariants:
    - PostCreate.slug: lowercase words joined by single hyphens, <= 200 chars
    - title/content stripped and non-empty; excerpt/cover_image "" → None
    - PostUpdate has no slug field (slug is immutable)
    - Read models are frozen and built from ORM rows (from_attributes)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class _PostContent(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=100_000)
    excerpt: str | None = Field(None, max_length=1000)
    cover_image: str | None = Field(None, max_length=1024)

    @field_validator("title", "content")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("excerpt", "cover_image")
    @classmethod
    def blank_optional(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class PostCreate(_PostContent):
    """Post creation — slug chosen by the author, immutable afterwards."""
    slug: str = Field(min_length=1, max_length=200, pattern=SLUG_PATTERN)


class PostUpdate(_PostContent):
    """Full replacement of a post's content fields."""
    expected_version: int | None = Field(None, ge=1)


class AuthorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    name: str | None
    image: str | None


class PostListItem(BaseModel):
    """List projection — everything the list page needs, no body."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    slug: str
    title: str
    excerpt: str | None
    cover_image: str | None
    created_at: datetime
    author: AuthorSummary


class PostDetail(PostListItem):
    """Single-post projection."""
    content: str
    updated_at: datetime
    author_id: UUID
    version: int
