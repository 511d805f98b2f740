"""Revalidation Dispatcher — turns successful writes into targeted cache invalidation.

Invariants:
    - invalidate_path(path): page entries of that route (all pagination variants)
      AND the data entries the route is built from become stale immediately
    - invalidate_tag(tag): data entries keyed/tagged by tag, and pages built from them
    - after_write() applies core.revalidation.plan_for_write — never clears everything
    - Runs synchronously on the write path: it completes before the response is sent
"""

import logging

from pressroom.core.domain_types import WriteKind
from pressroom.core.revalidation import (
    RevalidationPlan, data_tags_for_path, normalize_path, plan_for_write,
)
from pressroom.infrastructure.content_cache import ContentCache

logger = logging.getLogger(__name__)


class RevalidationDispatcher:
    """Targeted invalidation across the data cache and the page cache."""

    def __init__(self, data_cache: ContentCache, page_cache: ContentCache):
        self.data_cache = data_cache
        self.page_cache = page_cache

    def invalidate_path(self, path: str) -> None:
        route = normalize_path(path)
        self.page_cache.invalidate(route)
        for tag in data_tags_for_path(route):
            self.invalidate_tag(tag)
        logger.info(f"Revalidated route {route}", extra={"path": route})

    def invalidate_tag(self, tag: str) -> None:
        self.data_cache.invalidate(tag)
        self.page_cache.invalidate(tag)

    def after_write(self, kind: WriteKind, slug: str) -> RevalidationPlan:
        plan = plan_for_write(kind, slug)
        for path in plan.paths:
            self.invalidate_path(path)
        for tag in plan.tags:
            self.invalidate_tag(tag)
        logger.info(
            f"Dispatched revalidation for {kind.value} of {slug}",
            extra={"slug": slug, "tags": list(plan.paths + plan.tags)},
        )
        return plan
