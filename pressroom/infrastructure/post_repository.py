"""Post Repository — SQLAlchemy implementation of the ContentStore protocol.

Invariants:
    - Works inside the caller's AsyncSession (one session per request)
    - Filters: slug equality, published equality; ordering: created_at DESC only
    - Mutations flush but never commit: the caller owns the transaction
"""

import logging
from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.core.domain_types import PostId
from pressroom.models.post import Post

logger = logging.getLogger(__name__)


class PostRepository:
    """Content Store over the posts table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, post_id: PostId) -> Post | None:
        result = await self.db.execute(select(Post).where(Post.id == post_id))
        return result.scalar_one_or_none()

    async def find_by_slug(
        self, slug: str, published_only: bool = False,
    ) -> Post | None:
        query = select(Post).where(Post.slug == slug)
        if published_only:
            query = query.where(Post.published.is_(True))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_published(self) -> Sequence[Post]:
        result = await self.db.execute(
            select(Post)
            .where(Post.published.is_(True))
            .order_by(Post.created_at.desc()),
        )
        return result.scalars().all()

    async def list_published_slugs(self) -> list[str]:
        result = await self.db.execute(
            select(Post.slug).where(Post.published.is_(True)),
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Post))
        return result.scalar_one()

    async def create(self, **fields: Any) -> Post:
        post = Post(**fields)
        self.db.add(post)
        await self.db.flush()
        return post

    async def update(self, post: Post, **fields: Any) -> Post:
        for name, value in fields.items():
            setattr(post, name, value)
        await self.db.flush()
        return post

    async def delete(self, post: Post) -> None:
        await self.db.delete(post)
        await self.db.flush()

    async def delete_many_by_slug(self, slug: str) -> int:
        result = await self.db.execute(delete(Post).where(Post.slug == slug))
        return result.rowcount or 0
