"""Revalidation Rules — which routes and data tags a write makes stale.

Invariants:
    - create → list route only (a new slug cannot already be cached)
    - update → list route AND the post route of that slug
    - delete → list route; the post's data tag is dropped because its row is gone
    - A write never produces a global invalidation
    - Route → data tags: "/blog" → "published-posts", "/blog/<slug>" → "post-<slug>"

Design Decisions:
    - Pure functions returning plans: the dispatcher (services/) owns the cache IO
"""

from dataclasses import dataclass, field

from pressroom.core.domain_types import (
    BLOG_LIST_PATH,
    PUBLISHED_POSTS_KEY,
    WriteKind,
    post_cache_key,
    post_path,
)


@dataclass(frozen=True)
class RevalidationPlan:
    """Targets of one write: routes to revalidate plus extra data tags to drop."""
    paths: tuple[str, ...]
    tags: tuple[str, ...] = field(default_factory=tuple)


def plan_for_write(kind: WriteKind, slug: str) -> RevalidationPlan:
    """Build the revalidation plan for a successful write on the post `slug`."""
    if kind == WriteKind.CREATE:
        return RevalidationPlan(paths=(BLOG_LIST_PATH,))
    if kind == WriteKind.UPDATE:
        return RevalidationPlan(paths=(BLOG_LIST_PATH, post_path(slug)))
    if kind == WriteKind.DELETE:
        return RevalidationPlan(
            paths=(BLOG_LIST_PATH,), tags=(post_cache_key(slug),),
        )
    raise ValueError(f"Unknown write kind: {kind}")


def data_tags_for_path(path: str) -> list[str]:
    """Data cache tags a route is rendered from."""
    path = normalize_path(path)
    if path == BLOG_LIST_PATH:
        return [PUBLISHED_POSTS_KEY]
    prefix = BLOG_LIST_PATH + "/"
    if path.startswith(prefix):
        slug = path[len(prefix):]
        if slug and "/" not in slug:
            return [post_cache_key(slug)]
    return []


def normalize_path(path: str) -> str:
    """Drop the query string and any trailing slash ("/blog/?page=2" → "/blog")."""
    path = path.split("?", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"
