"""Post Actions — create, update and delete posts, then revalidate affected routes.

Each action is a single-shot transition:
    Unauthenticated → Authenticated&Authorized → Mutated → Revalidated

Invariants:
    - No session → UNAUTHENTICATED before any store access
    - Ownership check and mutation run in one DB transaction (check-then-act)
    - create: slug unique (CONFLICT), always published, author = actor
    - update: fields replaced (not merged), slug never touched, optional version check
    - delete: hard delete, no tombstone
    - Revalidation dispatched only after a successful commit, outside the
      rollback path (a dispatch error propagates; the write stays committed)
    - Store and domain failures never raise: each becomes an ActionResult
    - A unique-slug violation at insert is CONFLICT; other integrity errors
      on update/delete are UPSTREAM_FAILURE (DatabaseError)
"""

import logging
from typing import Awaitable, Callable
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from pressroom.core.action_result import ActionResult
from pressroom.core.cdn import CdnUrls
from pressroom.core.domain_types import PostId, WriteKind
from pressroom.core.errors import (
    ConcurrencyError,
    DatabaseError,
    ErrorContext,
    ForbiddenError,
    PressroomError,
    ResourceNotFoundError,
    SlugConflictError,
    UnauthenticatedError,
    UpstreamFailureError,
)
from pressroom.core.post_fields import content_fields, require_fields
from pressroom.core.repository_protocols import ContentStore, PostLike, SessionInfoLike
from pressroom.infrastructure.post_repository import PostRepository
from pressroom.services.revalidation_dispatcher import RevalidationDispatcher

logger = logging.getLogger(__name__)


class PostActions:
    """Write actions for one request's DB session."""

    def __init__(
        self,
        db: AsyncSession,
        dispatcher: RevalidationDispatcher,
        cdn_urls: CdnUrls,
    ):
        self.db = db
        self.repo: ContentStore = PostRepository(db)
        self.dispatcher = dispatcher
        self.cdn_urls = cdn_urls

    async def create_post(
        self,
        session: SessionInfoLike | None,
        *,
        title: str,
        slug: str,
        content: str,
        excerpt: str | None = None,
        cover_image: str | None = None,
    ) -> ActionResult:
        async def run() -> str:
            actor = _require_session(session)
            require_fields(title=title, content=content, slug=slug)
            if await self.repo.find_by_slug(slug) is not None:
                raise SlugConflictError(slug, ErrorContext(slug=slug))
            fields = content_fields(title, content, excerpt, cover_image)
            fields["cover_image"] = self.cdn_urls.strip(fields["cover_image"])
            try:
                post = await self.repo.create(
                    slug=slug, published=True, author_id=actor.user_id, **fields,
                )
                await self.db.commit()
            except IntegrityError:
                # Lost the race against a concurrent create with the same slug
                raise SlugConflictError(slug, ErrorContext(slug=slug))
            logger.info(
                f"Post created: {slug}",
                extra={"post_id": str(post.id), "user_id": str(actor.user_id)},
            )
            return slug

        return await self._perform("create", WriteKind.CREATE, run)

    async def update_post(
        self,
        session: SessionInfoLike | None,
        post_id: UUID,
        *,
        title: str,
        content: str,
        excerpt: str | None = None,
        cover_image: str | None = None,
        expected_version: int | None = None,
    ) -> ActionResult:
        async def run() -> str:
            actor = _require_session(session)
            require_fields(title=title, content=content)
            post = await self._owned_post(actor, post_id, "edit")
            if expected_version is not None and post.version != expected_version:
                raise ConcurrencyError(
                    "Post was modified by another request; reload and retry",
                    ErrorContext(post_id=str(post_id), slug=post.slug),
                )
            fields = content_fields(title, content, excerpt, cover_image)
            fields["cover_image"] = self.cdn_urls.strip(fields["cover_image"])
            await self.repo.update(post, **fields)
            slug = post.slug
            await self.db.commit()
            logger.info(
                f"Post updated: {slug}",
                extra={"post_id": str(post_id), "user_id": str(actor.user_id)},
            )
            return slug

        return await self._perform("update", WriteKind.UPDATE, run)

    async def delete_post(
        self, session: SessionInfoLike | None, post_id: UUID,
    ) -> ActionResult:
        async def run() -> str:
            actor = _require_session(session)
            post = await self._owned_post(actor, post_id, "delete")
            slug = post.slug
            await self.repo.delete(post)
            await self.db.commit()
            logger.info(
                f"Post deleted: {slug}",
                extra={"post_id": str(post_id), "user_id": str(actor.user_id)},
            )
            return slug

        return await self._perform("delete", WriteKind.DELETE, run)

    # ─── helpers ─────────────────────────────────────────────────

    async def _owned_post(
        self, actor: SessionInfoLike, post_id: UUID, action: str,
    ) -> PostLike:
        post = await self.repo.find_by_id(PostId(post_id))
        if post is None:
            raise ResourceNotFoundError("Post", str(post_id))
        if post.author_id != actor.user_id:
            raise ForbiddenError(
                action, ErrorContext(post_id=str(post_id), user_id=str(actor.user_id)),
            )
        return post

    async def _perform(
        self, action: str, kind: WriteKind, run: Callable[[], Awaitable[str]],
    ) -> ActionResult:
        """Run the transactional part, then revalidate outside of it."""
        try:
            slug = await run()
        except PressroomError as e:
            await self.db.rollback()
            logger.warning(
                f"{action} rejected: {e.message}", extra={"error_code": e.code},
            )
            return ActionResult.failed(e)
        except StaleDataError:
            await self.db.rollback()
            return ActionResult.failed(ConcurrencyError(
                "Post was modified by another request; reload and retry",
            ))
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to {action} post: {e}", exc_info=True)
            return ActionResult.failed(DatabaseError(f"Failed to {action} post", action))
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to {action} post: {e}", exc_info=True)
            return ActionResult.failed(
                UpstreamFailureError(f"Failed to {action} post", "store"),
            )

        # Committed: a dispatch failure propagates and never triggers a rollback
        self.dispatcher.after_write(kind, slug)
        return ActionResult.ok(slug)


def _require_session(session: SessionInfoLike | None) -> SessionInfoLike:
    if session is None:
        raise UnauthenticatedError()
    return session
