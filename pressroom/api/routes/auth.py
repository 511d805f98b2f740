"""Auth Routes — email/password login issuing a signed session token.

Invariants:
    - Unknown email and wrong password produce the same 401
    - Token returned in the body AND set as an httponly cookie
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.api.dependencies import get_container, get_current_session, get_db
from pressroom.container import AppContainer
from pressroom.core.errors import UnauthenticatedError
from pressroom.infrastructure.identity import SessionInfo
from pressroom.infrastructure.passwords import verify_password
from pressroom.models.user import User
from pressroom.schemas.auth import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    container: AppContainer = Depends(get_container),
):
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(body.password, user.password_hash):
        raise UnauthenticatedError("Invalid email or password")

    identity = container.identity
    token = identity.issue(user.id)
    response = JSONResponse(
        content=LoginResponse(
            user_id=user.id, name=user.name, token=token,
        ).model_dump(mode="json"),
    )
    response.set_cookie(
        identity.cookie_name, token,
        max_age=identity.max_age_seconds, httponly=True, samesite="lax",
    )
    logger.info("User logged in", extra={"user_id": str(user.id)})
    return response


@router.post("/logout")
async def logout(container: AppContainer = Depends(get_container)):
    response = JSONResponse(content={"success": True})
    response.delete_cookie(container.identity.cookie_name)
    return response


@router.get("/session")
async def current_session(
    session: SessionInfo | None = Depends(get_current_session),
):
    if session is None:
        return {"authenticated": False, "user_id": None}
    return {"authenticated": True, "user_id": str(session.user_id)}
