"""FastAPI Dependencies — resolve collaborators from the composition root.

Invariants:
    - Everything comes from request.app.state.container (no module globals)
    - get_db yields one session per request, rolled back on error
    - get_current_session reads the live request every time (never cached)
    - require_session fails with UNAUTHENTICATED ahead of request validation
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.container import AppContainer
from pressroom.core.errors import UnauthenticatedError
from pressroom.core.repository_protocols import IdentityProvider
from pressroom.infrastructure.identity import SessionInfo
from pressroom.services.post_actions import PostActions


def get_container(request: Request) -> AppContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Application container not initialized")
    return container


async def get_db(
    container: AppContainer = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with container.db.session() as session:
        yield session


def get_current_session(
    request: Request, container: AppContainer = Depends(get_container),
) -> SessionInfo | None:
    identity: IdentityProvider = container.identity
    return identity.current_session(request)


def require_session(
    session: SessionInfo | None = Depends(get_current_session),
) -> SessionInfo:
    """Reject anonymous callers before the body or path is validated."""
    if session is None:
        raise UnauthenticatedError()
    return session


def get_post_actions(
    db: AsyncSession = Depends(get_db),
    container: AppContainer = Depends(get_container),
) -> PostActions:
    return PostActions(db, container.dispatcher, container.cdn_urls)
