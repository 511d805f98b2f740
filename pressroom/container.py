"""Composition Root — builds every long-lived collaborator from Settings.

Invariants:
    - One AppContainer per application instance, stored on app.state.container
    - Built in the lifespan startup, closed in the lifespan shutdown
    - Nothing here is a module-level global; tests build their own container
"""

import logging
from dataclasses import dataclass

import httpx

from pressroom.config import Settings
from pressroom.core.cdn import CdnUrls
from pressroom.infrastructure.asset_upload import CdnUploader
from pressroom.infrastructure.content_cache import ContentCache
from pressroom.infrastructure.database import DatabaseSessionManager
from pressroom.infrastructure.identity import SignedTokenIdentity
from pressroom.services.page_renderer import PageRenderer
from pressroom.services.post_reads import PostReader
from pressroom.services.revalidation_dispatcher import RevalidationDispatcher

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    settings: Settings
    db: DatabaseSessionManager
    data_cache: ContentCache
    page_cache: ContentCache
    dispatcher: RevalidationDispatcher
    renderer: PageRenderer
    identity: SignedTokenIdentity
    cdn_urls: CdnUrls
    uploader: CdnUploader
    http_client: httpx.AsyncClient

    async def close(self) -> None:
        await self.http_client.aclose()
        await self.db.close()


def build_container(
    settings: Settings,
    db: DatabaseSessionManager | None = None,
    http_client: httpx.AsyncClient | None = None,
    data_cache: ContentCache | None = None,
    page_cache: ContentCache | None = None,
) -> AppContainer:
    """Wire the application graph. Overrides are for tests."""
    if db is None:
        db = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    # ContentCache defines __len__, so an empty one is falsy
    if data_cache is None:
        data_cache = ContentCache("data-cache")
    if page_cache is None:
        page_cache = ContentCache("page-cache")
    cdn_urls = CdnUrls(
        image_base=settings.cdn_image_base_url,
        thumbnail_base=settings.cdn_thumbnail_base_url,
    )
    if http_client is None:
        http_client = httpx.AsyncClient(
            timeout=settings.cdn_upload_timeout_seconds,
        )
    reader = PostReader(data_cache, settings.data_cache_ttl_seconds)
    container = AppContainer(
        settings=settings,
        db=db,
        data_cache=data_cache,
        page_cache=page_cache,
        dispatcher=RevalidationDispatcher(data_cache, page_cache),
        renderer=PageRenderer(
            reader,
            page_cache,
            cdn_urls,
            revalidate_seconds=settings.page_revalidate_seconds,
            per_page=settings.posts_per_page,
        ),
        identity=SignedTokenIdentity(
            settings.session_secret,
            settings.session_max_age_seconds,
            settings.session_cookie_name,
        ),
        cdn_urls=cdn_urls,
        uploader=CdnUploader(
            http_client,
            settings.cdn_upload_url,
            settings.cdn_upload_api_key,
            cdn_urls,
            max_bytes=settings.cdn_upload_max_bytes,
        ),
        http_client=http_client,
    )
    logger.info("Application container built")
    return container
