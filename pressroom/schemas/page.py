"""Page Documents — the rendered output of the list and single-post routes.

Invariants:
    - Documents are frozen and contain no viewer-specific data (they are cached)
    - Image URLs are absolute (CDN base re-applied); body is HTML
    - revalidate = route-level regeneration period in seconds
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from pressroom.schemas.post import AuthorSummary


class PostCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    slug: str
    title: str
    excerpt: str | None
    cover_image_url: str | None
    created_at: datetime
    author: AuthorSummary


class ListPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    posts: list[PostCard]
    page: int
    per_page: int
    total_items: int
    total_pages: int
    has_next: bool
    has_previous: bool
    revalidate: int
    generated_at: datetime


class RenderedPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    slug: str
    title: str
    excerpt: str | None
    content_html: str
    cover_image_url: str | None
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary
    author_id: UUID
    version: int


class PostPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    post: RenderedPost
    revalidate: int
    generated_at: datetime


class ViewerContext(BaseModel):
    """Per-request, never cached."""
    authenticated: bool
    can_edit: bool
    can_delete: bool
