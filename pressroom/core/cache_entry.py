"""Cache Entry — a computed value with an expiry instant and invalidation tags.

Invariants:
    - expires_at = stored_at + ttl_seconds (monotonic clock seconds)
    - An entry is fresh strictly before expires_at
    - tags always contain the entry's own key
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cached value — replaced, never mutated."""

    key: str
    value: Any
    expires_at: float
    tags: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls, key: str, value: Any, now: float, ttl_seconds: float,
        tags: tuple[str, ...] | list[str] = (),
    ) -> "CacheEntry":
        return cls(
            key=key,
            value=value,
            expires_at=now + ttl_seconds,
            tags=frozenset((key, *tags)),
        )

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at

    def matches(self, tag: str) -> bool:
        return tag in self.tags
