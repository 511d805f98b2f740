"""Post Reads — store queries wrapped in the data cache.

Invariants:
    - List: published posts, newest first, under key "published-posts"
    - Single: published post by slug, under key "post-<slug>"; unpublished and
      nonexistent slugs both yield None (and None is never cached)
    - Values cached are frozen schema models, detached from the DB session
    - Store failures surface as DatabaseError; cached values are left untouched
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.core.domain_types import PUBLISHED_POSTS_KEY, post_cache_key
from pressroom.core.errors import DatabaseError
from pressroom.infrastructure.content_cache import ContentCache
from pressroom.infrastructure.post_repository import PostRepository
from pressroom.schemas.post import PostDetail, PostListItem

logger = logging.getLogger(__name__)


class PostReader:
    """Cached read paths used by the page renderer."""

    def __init__(self, cache: ContentCache, ttl_seconds: int):
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    async def published_posts(self, db: AsyncSession) -> list[PostListItem]:
        async def load() -> list[PostListItem]:
            try:
                rows = await PostRepository(db).find_published()
            except SQLAlchemyError as e:
                logger.error(f"Loading published posts failed: {e}")
                raise DatabaseError("Could not load posts", "query")
            return [PostListItem.model_validate(row) for row in rows]

        return await self.cache.get(PUBLISHED_POSTS_KEY, load, self.ttl_seconds)

    async def post_by_slug(self, db: AsyncSession, slug: str) -> PostDetail | None:
        async def load() -> PostDetail | None:
            try:
                row = await PostRepository(db).find_by_slug(slug, published_only=True)
            except SQLAlchemyError as e:
                logger.error(f"Loading post {slug} failed: {e}", extra={"slug": slug})
                raise DatabaseError("Could not load post", "query")
            return PostDetail.model_validate(row) if row else None

        return await self.cache.get(post_cache_key(slug), load, self.ttl_seconds)
