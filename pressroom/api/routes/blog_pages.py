"""Blog Pages — the public list and single-post routes.

Invariants:
    - GET /blog?page=N and GET /blog/{slug} are served from the page cache
    - Unknown and unpublished slugs both produce the same 404 document
    - Anonymous responses are shared-cacheable for the route's revalidate period;
      responses carrying a viewer context are private
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.api.dependencies import get_container, get_current_session, get_db
from pressroom.container import AppContainer
from pressroom.infrastructure.identity import SessionInfo

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/blog", tags=["blog"])


def _public_cache_headers(revalidate: int) -> dict:
    return {
        "Cache-Control": f"public, s-maxage={revalidate}, stale-while-revalidate",
    }


@router.get("")
async def blog_list(
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
    container: AppContainer = Depends(get_container),
):
    """Published posts, newest first."""
    rendered = await container.renderer.render_list(db, page)
    return JSONResponse(
        content=rendered.model_dump(mode="json"),
        headers=_public_cache_headers(rendered.revalidate),
    )


@router.get("/{slug}")
async def blog_post(
    slug: str,
    db: AsyncSession = Depends(get_db),
    container: AppContainer = Depends(get_container),
    session: SessionInfo | None = Depends(get_current_session),
):
    """A single published post, with owner affordances for its author."""
    rendered = await container.renderer.render_post(db, slug)
    viewer = container.renderer.viewer_context(rendered, session)
    body = rendered.model_dump(mode="json")
    body["viewer"] = viewer.model_dump()
    headers = (
        {"Cache-Control": "private, no-store"}
        if session is not None
        else _public_cache_headers(rendered.revalidate)
    )
    return JSONResponse(content=body, headers=headers)
