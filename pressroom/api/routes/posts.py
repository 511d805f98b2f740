"""Post Write Routes — create, update, delete.

Invariants:
    - Anonymous callers get 401 before the body or path id is validated
    - Request bodies validated by Pydantic before reaching the action
    - Once authenticated, the response body is ActionResult.to_response()
      ({success, error?, slug?}); the 401 uses the global error envelope
    - HTTP status mirrors the action's error (401/403/404/409/400/503)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pressroom.api.dependencies import get_post_actions, require_session
from pressroom.core.action_result import ActionResult
from pressroom.infrastructure.identity import SessionInfo
from pressroom.schemas.post import PostCreate, PostUpdate
from pressroom.services.post_actions import PostActions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


def _respond(result: ActionResult, success_status: int) -> JSONResponse:
    code = success_status if result.success else result.error.http_status
    return JSONResponse(
        status_code=code,
        content=result.to_response(),
        headers={"Cache-Control": "no-store"},
    )


@router.post("")
async def create_post(
    body: PostCreate,
    session: SessionInfo = Depends(require_session),
    actions: PostActions = Depends(get_post_actions),
):
    result = await actions.create_post(
        session,
        title=body.title,
        slug=body.slug,
        content=body.content,
        excerpt=body.excerpt,
        cover_image=body.cover_image,
    )
    return _respond(result, status.HTTP_201_CREATED)


@router.put("/{post_id}")
async def update_post(
    post_id: UUID,
    body: PostUpdate,
    session: SessionInfo = Depends(require_session),
    actions: PostActions = Depends(get_post_actions),
):
    result = await actions.update_post(
        session,
        post_id,
        title=body.title,
        content=body.content,
        excerpt=body.excerpt,
        cover_image=body.cover_image,
        expected_version=body.expected_version,
    )
    return _respond(result, status.HTTP_200_OK)


@router.delete("/{post_id}")
async def delete_post(
    post_id: UUID,
    session: SessionInfo = Depends(require_session),
    actions: PostActions = Depends(get_post_actions),
):
    result = await actions.delete_post(session, post_id)
    return _respond(result, status.HTTP_200_OK)
