"""Page Renderer — builds and caches the list and single-post page documents.

Invariants:
    - Page entries have their own TTL (route revalidate period), independent of data TTL
    - List pages keyed "/blog", "/blog?page=N"; tagged "/blog" and "published-posts"
    - Post pages keyed "/blog/<slug>"; tagged "post-<slug>"
    - Not-found outcomes (unknown slug, unpublished post, page past the end) are
      never cached and raise ResourceNotFoundError
    - Viewer context (owner affordances) is computed per request from the live
      session and is never part of a cached document
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.core.cdn import CdnUrls
from pressroom.core.domain_types import (
    BLOG_LIST_PATH, PUBLISHED_POSTS_KEY, list_page_key, post_cache_key, post_path,
)
from pressroom.core.errors import ResourceNotFoundError
from pressroom.core.pagination import paginate
from pressroom.core.rendering import render_html
from pressroom.infrastructure.content_cache import ContentCache
from pressroom.infrastructure.database import DatabaseSessionManager
from pressroom.infrastructure.post_repository import PostRepository
from pressroom.infrastructure.identity import SessionInfo
from pressroom.schemas.page import (
    ListPage, PostCard, PostPage, RenderedPost, ViewerContext,
)
from pressroom.schemas.post import PostDetail
from pressroom.services.post_reads import PostReader

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PageRenderer:
    """Route-level rendering on top of the cached read paths."""

    def __init__(
        self,
        reader: PostReader,
        page_cache: ContentCache,
        cdn_urls: CdnUrls,
        revalidate_seconds: int,
        per_page: int,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.reader = reader
        self.page_cache = page_cache
        self.cdn_urls = cdn_urls
        self.revalidate_seconds = revalidate_seconds
        self.per_page = per_page
        self._now = now

    async def render_list(self, db: AsyncSession, page: int = 1) -> ListPage:
        page = max(1, page)
        key = list_page_key(page)

        async def build() -> ListPage | None:
            posts = await self.reader.published_posts(db)
            window = paginate(posts, page, self.per_page)
            if page > window.total_pages:
                return None
            logger.info(f"Rendered {key}", extra={"path": key})
            return ListPage(
                posts=[self._card(p) for p in window.items],
                page=window.page,
                per_page=window.per_page,
                total_items=window.total_items,
                total_pages=window.total_pages,
                has_next=window.has_next,
                has_previous=window.has_previous,
                revalidate=self.revalidate_seconds,
                generated_at=self._now(),
            )

        rendered = await self.page_cache.get(
            key, build, self.revalidate_seconds,
            tags=(BLOG_LIST_PATH, PUBLISHED_POSTS_KEY),
        )
        if rendered is None:
            raise ResourceNotFoundError("Page", str(page))
        return rendered

    async def render_post(self, db: AsyncSession, slug: str) -> PostPage:
        path = post_path(slug)

        async def build() -> PostPage | None:
            post = await self.reader.post_by_slug(db, slug)
            if post is None:
                return None
            logger.info(f"Rendered {path}", extra={"path": path})
            return PostPage(
                post=self._rendered(post),
                revalidate=self.revalidate_seconds,
                generated_at=self._now(),
            )

        rendered = await self.page_cache.get(
            path, build, self.revalidate_seconds, tags=(post_cache_key(slug),),
        )
        if rendered is None:
            raise ResourceNotFoundError("Post", slug)
        return rendered

    @staticmethod
    def viewer_context(page: PostPage, session: SessionInfo | None) -> ViewerContext:
        is_owner = session is not None and session.user_id == page.post.author_id
        return ViewerContext(
            authenticated=session is not None,
            can_edit=is_owner,
            can_delete=is_owner,
        )

    async def prerender_all(self, db_manager: DatabaseSessionManager) -> int:
        """Warm the first list page and every published post page."""
        async with db_manager.session() as db:
            slugs = await PostRepository(db).list_published_slugs()
            await self.render_list(db, 1)
            rendered = 0
            for slug in slugs:
                try:
                    await self.render_post(db, slug)
                    rendered += 1
                except ResourceNotFoundError:
                    logger.warning(f"Slug vanished during prerender: {slug}")
        logger.info(f"Prerendered {rendered} post pages")
        return rendered

    def _card(self, post) -> PostCard:
        return PostCard(
            id=post.id,
            slug=post.slug,
            title=post.title,
            excerpt=post.excerpt,
            cover_image_url=self.cdn_urls.resolve(post.cover_image),
            created_at=post.created_at,
            author=post.author,
        )

    def _rendered(self, post: PostDetail) -> RenderedPost:
        return RenderedPost(
            id=post.id,
            slug=post.slug,
            title=post.title,
            excerpt=post.excerpt,
            content_html=render_html(post.content),
            cover_image_url=self.cdn_urls.resolve(post.cover_image),
            created_at=post.created_at,
            updated_at=post.updated_at,
            author=post.author,
            author_id=post.author_id,
            version=post.version,
        )
