"""Domain Types — identity types, cache keys and route paths shared across layers.

Invariants:
    - PostId, UserId wrap UUIDs — never use bare UUID in domain logic
    - Data cache keys: "published-posts" for the list, "post-<slug>" per post
    - Route paths: "/blog" for the list, "/blog/<slug>" per post
    - Keys and paths are derived from the slug only (slug is immutable)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", UUID)
UserId = NewType("UserId", UUID)


# ─── Cache Keys & Routes ─────────────────────────────────────────

PUBLISHED_POSTS_KEY = "published-posts"
POST_KEY_PREFIX = "post-"

BLOG_LIST_PATH = "/blog"


def post_cache_key(slug: str) -> str:
    """Data cache key for a single post."""
    return f"{POST_KEY_PREFIX}{slug}"


def post_path(slug: str) -> str:
    """Route path of the single-post page."""
    return f"{BLOG_LIST_PATH}/{slug}"


def list_page_key(page: int) -> str:
    """Page cache key for one page of the list route."""
    if page <= 1:
        return BLOG_LIST_PATH
    return f"{BLOG_LIST_PATH}?page={page}"


# ─── Enums ───────────────────────────────────────────────────────

class WriteKind(str, Enum):
    """Write actions that trigger revalidation."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
