"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; core never awaits them itself
"""

from typing import Any, Protocol, Sequence

from pressroom.core.domain_types import PostId, UserId


class PostLike(Protocol):
    """Structural contract for Post rows handed to services."""
    id: PostId
    slug: str
    title: str
    excerpt: str | None
    content: str
    cover_image: str | None
    published: bool
    author_id: UserId
    version: int


class SessionInfoLike(Protocol):
    """What the identity provider reports about the current actor."""
    user_id: UserId


class ContentStore(Protocol):
    """Contract for post persistence — implemented by shell."""
    async def find_by_id(self, post_id: PostId) -> PostLike | None: ...
    async def find_by_slug(
        self, slug: str, published_only: bool = False,
    ) -> PostLike | None: ...
    async def find_published(self) -> Sequence[PostLike]: ...
    async def list_published_slugs(self) -> list[str]: ...
    async def create(self, **fields: Any) -> PostLike: ...
    async def update(self, post: PostLike, **fields: Any) -> PostLike: ...
    async def delete(self, post: PostLike) -> None: ...
    async def delete_many_by_slug(self, slug: str) -> int: ...


class IdentityProvider(Protocol):
    """Contract for session lookup — implemented by shell."""
    def current_session(self, request: Any) -> SessionInfoLike | None: ...


class AssetUploader(Protocol):
    """Contract for binary uploads to the CDN — implemented by shell."""
    max_bytes: int

    async def upload(
        self, filename: str, content_type: str, payload: bytes,
    ) -> Any: ...
