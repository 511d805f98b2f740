"""Content Cache — read-through key/value cache with TTL, tags and load coalescing.

Used twice by the composition root: once for data fetched from the store
("published-posts", "post-<slug>") and once for rendered pages ("/blog",
"/blog?page=2", "/blog/<slug>").

Invariants:
    - get(key, loader, ttl): fresh entry → stored value, loader NOT invoked;
      missing/expired entry → await loader(), store with expiry now + ttl
    - At most one loader in flight per key (per-key asyncio.Lock, re-checked after acquire)
    - Loader failure propagates; the existing entry (even if expired) is left in place
    - None results are returned but never stored
    - A load that overlaps an invalidation of any of its tags is returned, not stored
    - invalidate(tag) drops every entry whose key or tags contain tag
    - Expiry is checked lazily on access; no background timers
    - A key's lock lives only while a request is waiting on or holding it;
      invalidation marks live only while a load that started before them runs

Design Decisions:
    - Clock injectable (monotonic seconds): tests advance time without sleeping
    - In-process table: request handlers share one instance per worker
"""

import asyncio
import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable

from pressroom.core.cache_entry import CacheEntry

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    loads: int = 0
    load_failures: int = 0
    invalidations: int = 0

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "loads": self.loads,
            "load_failures": self.load_failures,
            "invalidations": self.invalidations,
        }


class ContentCache:
    """Named, TTL-bound cache entries with tag-based invalidation."""

    def __init__(
        self, name: str, clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: Counter[str] = Counter()
        # started epoch → number of loads in flight from it
        self._inflight: Counter[int] = Counter()
        self._epoch = 0
        self._invalidated_at: dict[str, int] = {}
        self._cleared_at = -1
        self.stats = CacheStats()

    def __len__(self) -> int:
        return len(self._entries)

    def entry(self, key: str) -> CacheEntry | None:
        """Raw entry lookup, fresh or not (no stats, no loading)."""
        return self._entries.get(key)

    def peek(self, key: str) -> Any | None:
        """Stored value if fresh, else None (no stats, no loading)."""
        entry = self._entries.get(key)
        if entry and entry.is_fresh(self._clock()):
            return entry.value
        return None

    async def get(
        self,
        key: str,
        loader: Loader,
        ttl_seconds: float,
        tags: Iterable[str] = (),
    ) -> Any:
        """Return the fresh value for key, loading it through loader on miss."""
        entry = self._entries.get(key)
        if entry and entry.is_fresh(self._clock()):
            self.stats.hits += 1
            logger.debug(f"{self.name} hit: {key}", extra={"cache_key": key})
            return entry.value

        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] += 1
        try:
            async with lock:
                return await self._load(key, loader, ttl_seconds, tags)
        finally:
            self._waiters[key] -= 1
            if not self._waiters[key]:
                del self._waiters[key]
                del self._locks[key]

    async def _load(
        self, key: str, loader: Loader, ttl_seconds: float, tags: Iterable[str],
    ) -> Any:
        # Another request may have regenerated the entry while we waited
        entry = self._entries.get(key)
        if entry and entry.is_fresh(self._clock()):
            self.stats.hits += 1
            return entry.value

        self.stats.misses += 1
        logger.debug(f"{self.name} miss: {key}", extra={"cache_key": key})
        started_epoch = self._epoch
        self._inflight[started_epoch] += 1
        try:
            value = await loader()
        except Exception:
            self.stats.load_failures += 1
            logger.warning(
                f"{self.name} load failed: {key}",
                extra={"cache_key": key},
            )
            raise
        finally:
            self._inflight[started_epoch] -= 1
            if not self._inflight[started_epoch]:
                del self._inflight[started_epoch]
        self.stats.loads += 1

        if value is None:
            self._prune_invalidations()
            return None
        new_entry = CacheEntry.build(
            key, value, self._clock(), ttl_seconds, tuple(tags),
        )
        overlapped = self._invalidated_since(new_entry, started_epoch)
        self._prune_invalidations()
        if overlapped:
            logger.debug(
                f"{self.name} discarded load overlapping invalidation: {key}",
                extra={"cache_key": key},
            )
            return value
        self._entries[key] = new_entry
        return value

    def invalidate(self, tag: str) -> int:
        """Drop every entry keyed or tagged by tag. Returns the number dropped."""
        self._epoch += 1
        self._invalidated_at[tag] = self._epoch
        stale = [k for k, e in self._entries.items() if e.matches(tag)]
        for k in stale:
            del self._entries[k]
        self._prune_invalidations()
        self.stats.invalidations += 1
        logger.info(
            f"{self.name} invalidated {tag} ({len(stale)} entries)",
            extra={"cache_key": tag},
        )
        return len(stale)

    def clear(self) -> None:
        self._epoch += 1
        self._cleared_at = self._epoch
        self._entries.clear()
        self._prune_invalidations()
        logger.info(f"{self.name} cleared")

    def snapshot(self) -> dict:
        """Stats plus current size, for the readiness probe."""
        return {
            "size": len(self._entries),
            "locks": len(self._locks),
            "tracked_invalidations": len(self._invalidated_at),
            **self.stats.to_dict(),
        }

    def _invalidated_since(self, entry: CacheEntry, epoch: int) -> bool:
        if self._cleared_at > epoch:
            return True
        return any(
            self._invalidated_at.get(tag, -1) > epoch for tag in entry.tags
        )

    def _prune_invalidations(self) -> None:
        """Forget invalidation marks no in-flight load can still observe."""
        if not self._inflight:
            self._invalidated_at.clear()
            return
        oldest = min(self._inflight)
        self._invalidated_at = {
            tag: at for tag, at in self._invalidated_at.items() if at > oldest
        }
