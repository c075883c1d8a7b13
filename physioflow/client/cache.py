"""In-memory query cache keyed by tuples.

Keys are tuples such as ``("patients", "detail", "p-1")``. Invalidation and
removal match on key prefixes, so ``invalidate(("patients",))`` marks every
patient query stale.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Hashable, Optional

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]


@dataclass
class CacheEntry:
    data: Any
    updated_at: float = field(default_factory=time.monotonic)
    stale: bool = False


class QueryCache:
    """Cache for query results with staleness and prefix invalidation."""

    def __init__(
        self,
        stale_time: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Create a cache.

        Args:
            stale_time: Seconds a fresh entry is served without refetching
            clock: Monotonic time source
        """
        self.stale_time = stale_time
        self._clock = clock
        self._entries: dict[QueryKey, CacheEntry] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return tuple(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _matches(key: QueryKey, prefix: QueryKey) -> bool:
        return key[: len(prefix)] == prefix

    def keys(self, prefix: QueryKey = ()) -> list[QueryKey]:
        prefix = tuple(prefix)
        return [k for k in self._entries if self._matches(k, prefix)]

    def get_data(self, key: QueryKey) -> Any:
        entry = self._entries.get(tuple(key))
        return entry.data if entry else None

    def set_data(self, key: QueryKey, data: Any) -> None:
        self._entries[tuple(key)] = CacheEntry(data=data, updated_at=self._clock())

    def is_stale(self, key: QueryKey, stale_time: Optional[float] = None) -> bool:
        entry = self._entries.get(tuple(key))
        if entry is None or entry.stale:
            return True
        limit = self.stale_time if stale_time is None else stale_time
        return self._clock() - entry.updated_at > limit

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Mark every entry under ``prefix`` stale. Returns the count."""
        keys = self.keys(prefix)
        for key in keys:
            self._entries[key].stale = True
        if keys:
            logger.debug("Invalidated %d queries under %s", len(keys), prefix)
        return len(keys)

    def remove(self, prefix: QueryKey = ()) -> int:
        """Drop every entry under ``prefix``. Returns the count."""
        keys = self.keys(prefix)
        for key in keys:
            del self._entries[key]
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()

    async def fetch(
        self,
        key: QueryKey,
        fetcher: Callable[[], Awaitable[Any]],
        stale_time: Optional[float] = None,
    ) -> Any:
        """Return cached data while fresh, otherwise run ``fetcher`` and store it.

        Errors from ``fetcher`` propagate and leave the previous entry untouched.
        """
        key = tuple(key)
        if key in self._entries and not self.is_stale(key, stale_time):
            return self._entries[key].data

        data = await fetcher()
        self.set_data(key, data)
        return data
